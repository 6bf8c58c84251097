from runclub.engine.identity import IdentityRegistry, UNKNOWN_PROFILE, normalize_athlete_id


def test_normalize_athlete_id_mixed_forms():
    assert normalize_athlete_id(123) == "123"
    assert normalize_athlete_id("123") == "123"
    assert normalize_athlete_id(" 123 ") == "123"
    assert normalize_athlete_id(123.0) == "123"


def test_resolve_unknown_returns_sentinel():
    reg = IdentityRegistry()
    p = reg.resolve("nobody")
    assert p == UNKNOWN_PROFILE
    assert p.first_name == "Unknown"
    assert p.last_name == ""
    assert p.avatar is None


def test_activity_upsert_keeps_names_and_updates_avatar():
    reg = IdentityRegistry()
    reg.upsert_from_activity(7, "Ana", "Silva", None)
    reg.upsert_from_activity("7", "Anna", "Silvera", "https://img/a.png")
    p = reg.resolve(7)
    assert (p.first_name, p.last_name) == ("Ana", "Silva")
    assert p.avatar == "https://img/a.png"


def test_empty_avatar_does_not_clear_existing():
    reg = IdentityRegistry()
    reg.upsert_from_activity(7, "Ana", "Silva", "https://img/a.png")
    reg.upsert_from_activity(7, "Ana", "Silva", "")
    reg.upsert_from_activity(7, "Ana", "Silva", None)
    assert reg.resolve("7").avatar == "https://img/a.png"


def test_goal_source_splits_on_first_space():
    reg = IdentityRegistry()
    reg.upsert_from_goal_source("9", "  Mary Jane Watson ")
    p = reg.resolve(9)
    assert p.first_name == "Mary"
    assert p.last_name == "Jane Watson"
    assert p.avatar is None


def test_goal_source_single_word_name():
    reg = IdentityRegistry()
    reg.upsert_from_goal_source("9", "Cher")
    p = reg.resolve("9")
    assert p.first_name == "Cher"
    assert p.last_name == ""


def test_goal_source_never_overwrites_activity_profile():
    reg = IdentityRegistry()
    reg.upsert_from_activity(5, "Ben", "Okafor", "https://img/b.png")
    reg.upsert_from_goal_source("5", "Benjamin O.")
    p = reg.resolve(5)
    assert p.full_name == "Ben Okafor"
    assert p.avatar == "https://img/b.png"


def test_activity_replaces_goal_fallback_names():
    reg = IdentityRegistry()
    reg.upsert_from_goal_source("5", "Benjamin O.")
    reg.upsert_from_activity(5, "Ben", "Okafor", None)
    assert reg.resolve("5").full_name == "Ben Okafor"
    # Now an activity profile; names stick
    reg.upsert_from_activity(5, "Someone", "Else", None)
    assert reg.resolve("5").full_name == "Ben Okafor"


def test_one_entry_per_identifier():
    reg = IdentityRegistry()
    reg.upsert_from_activity(1, "A", "B")
    reg.upsert_from_activity("1", "A", "B")
    reg.upsert_from_goal_source(" 1", "A B")
    assert len(reg) == 1
