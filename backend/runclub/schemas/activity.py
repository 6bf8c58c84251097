from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ActivityRecordIn(BaseModel):
    """One runner's row in a weekly activity file."""

    athlete_id: Union[int, str]
    first_name: str = Field("", alias="athlete_firstname")
    last_name: str = Field("", alias="athlete_lastname")
    avatar: Optional[str] = Field(None, alias="athlete_picture_url")
    distance_m: float = Field(0.0, alias="distance")  # meters

    # Be lenient with extra fields (rank, elevation, moving time, ...)
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @field_validator("athlete_id")
    @classmethod
    def _id_not_blank(cls, v):
        if str(v).strip() == "":
            raise ValueError("athlete_id must not be empty")
        return v

    @field_validator("first_name", "last_name", mode="before")
    @classmethod
    def _none_to_empty(cls, v):
        return "" if v is None else v

    @field_validator("avatar", mode="before")
    @classmethod
    def _empty_to_none(cls, v):
        if v in ("", "null", "None"):
            return None
        return v

    @field_validator("distance_m", mode="before")
    @classmethod
    def _distance_default(cls, v):
        if v in ("", None):
            return 0.0
        return v

    @field_validator("distance_m")
    @classmethod
    def _non_negative(cls, v):
        return max(0.0, v)


class WeekFileIn(BaseModel):
    data: Optional[list[dict]] = None

    model_config = ConfigDict(extra="ignore")
