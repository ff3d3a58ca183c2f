from jominilint.item import Item
from jominilint.scopes import Scopes
from tests._shared_cases import dedent, lint_codes, localization_text, make_data, run_effect, run_trigger

TRAITS = "common/traits/00_traits.txt"
MODIFIERS = "common/modifiers/00_modifiers.txt"
REGIONS = "map_data/regions/00_regions.txt"
AREAS = "map_data/areas/00_areas.txt"
TEMPLATES = "common/scripted_character_templates/00_templates.txt"

# -------------------------
# Traits
# -------------------------

GOOD_TRAITS = dedent(
    """
    brave = {
        category = personality
        opposites = { craven }
        diplomacy = 2
        monthly_prestige = 0.5
        ai_boldness = 50
        good = yes
    }
    craven = {
        category = personality
        opposites = { brave }
        ai_boldness = -50
    }
    """
)


def test_good_traits_are_clean() -> None:
    assert lint_codes({TRAITS: GOOD_TRAITS}) == []


def test_trait_errors() -> None:
    cases = (
        ("category = silly", ["FIELD_EXPECTED_CHOICE"]),
        ("opposites = { coward }", ["ITEM_MISSING"]),
        ("build_speed = 0.1", ["MODIF_WRONG_KIND"]),
        ("monthly_prestige = lots", ["FIELD_EXPECTED_NUMBER"]),
        ("diplomacy = 0.1234567", ["FIELD_EXCESS_DECIMALS"]),
        ("minimum_age = 1.5", ["FIELD_EXPECTED_INTEGER"]),
        ("ai_boldness = { value = gold }", ["SCOPE_MISMATCH"]),
        ("swagger = 3", ["FIELD_UNKNOWN"]),
    )
    for body, expected in cases:
        assert lint_codes({TRAITS: f"brave = {{ {body} }}"}) == expected, body


def test_wrong_kind_modif_message() -> None:
    data = make_data({TRAITS: "brave = { build_speed = 0.1 }"})
    data.validate_all()

    assert data.sink.diagnostics[0].message == (
        "`build_speed` is a province modifier, not valid in a character modifier block"
    )


def test_trait_implied_localization() -> None:
    loc = {"localization/english/traits_l_english.yml": localization_text("english", "trait_brave")}

    data = make_data({TRAITS: "brave = { }", **loc})
    data.validate_all()

    assert data.sink.codes() == ["LOCALIZATION_MISSING"]
    assert data.sink.diagnostics[0].message == "missing localization key `trait_brave_desc`"

    explicit = {"localization/english/traits_l_english.yml": localization_text("english", "brave_name", "brave_desc")}
    assert lint_codes({TRAITS: "brave = { name = brave_name desc = brave_desc }", **explicit}) == []


# -------------------------
# Static modifiers
# -------------------------


def test_static_modifiers() -> None:
    good = "my_mod = { icon = gold_positive monthly_income = 1 fort_level = 1 development_growth = 0.1 }"
    assert lint_codes({MODIFIERS: good}) == []
    assert lint_codes({MODIFIERS: "my_mod = { movement_speed = 0.1 }"}) == ["MODIF_WRONG_KIND"]
    assert lint_codes({MODIFIERS: "my_mod = { stacking = perhaps }"}) == ["FIELD_EXPECTED_BOOL"]


def test_static_modifier_key_is_localized() -> None:
    loc = {"localization/english/m_l_english.yml": localization_text("english", "other_mod")}

    assert lint_codes({MODIFIERS: "my_mod = { }\nother_mod = { }", **loc}) == ["LOCALIZATION_MISSING"]


def test_modifier_references() -> None:
    data = make_data({MODIFIERS: "my_mod = { health = 1 }"})

    assert run_effect("add_character_modifier = { modifier = my_mod years = 5 }", data=data).sink.codes() == []
    assert run_effect("add_character_modifier = other_mod").sink.codes() == ["ITEM_MISSING"]
    assert run_trigger("has_character_modifier = other_mod").sink.codes() == ["ITEM_MISSING"]


# -------------------------
# Regions and areas
# -------------------------


def test_regions() -> None:
    areas = {AREAS: "area_a = { provinces = { 1 2 3 } }"}

    good = "my_region = { color = { 120 40 200 } areas = { area_a } }"
    assert lint_codes({REGIONS: good, **areas}) == []
    assert lint_codes({REGIONS: "my_region = { areas = { area_b } }", **areas}) == ["ITEM_MISSING"]


def test_region_colors() -> None:
    for color in ("{ 300 0 0 }", "{ 1 2 }", "hsv { 0.5 0.5 2 }", "rgb { 1.5 2 3 }", "lab { 1 2 3 }", "{ 1 x 3 }"):
        assert lint_codes({REGIONS: f"my_region = {{ color = {color} }}"}) == ["COLOR_INVALID"], color
    for color in ("hsv { 0.5 0.5 1 }", "hsv360 { 200 50 50 }", "rgb { 0 0 0 255 }"):
        assert lint_codes({REGIONS: f"my_region = {{ color = {color} }}"}) == [], color


def test_areas_take_integer_provinces() -> None:
    assert lint_codes({AREAS: "area_a = { provinces = { 1 2 x } }"}) == ["FIELD_EXPECTED_INTEGER"]


def test_county_in_region_iterator() -> None:
    data = make_data({REGIONS: "my_region = { }"})
    good = "every_county_in_region = { region = my_region change_development_level = 1 }"

    assert run_effect(good, data=data).sink.codes() == []
    assert run_effect("every_county_in_region = { change_development_level = 1 }").sink.codes() == ["FIELD_MISSING"]
    assert run_effect("every_county_in_region = { region = nowhere }").sink.codes() == ["ITEM_MISSING"]
    assert run_effect("every_vassal = { region = my_region }").sink.codes() == ["FIELD_BANNED"]


def test_geographical_region_trigger() -> None:
    data = make_data({REGIONS: "my_region = { }"})

    assert run_trigger("capital_province = { geographical_region = my_region }", data=data).sink.codes() == []
    assert run_trigger("geographical_region = my_region", root=Scopes.CHARACTER).sink.codes() == [
        "SCOPE_MISMATCH",
        "ITEM_MISSING",
    ]


# -------------------------
# Character templates
# -------------------------


def test_character_templates() -> None:
    traits = {TRAITS: "brave = { }"}
    good = dedent(
        """
        my_template = {
            age = { 16 30 }
            gender_female_chance = 50
            trait = brave
            random_traits_list = { count = 1 brave = { } }
            dynasty = generate
            after_creation = { add_gold = 10 }
        }
        """
    )

    assert lint_codes({TEMPLATES: good, **traits}) == []
    assert lint_codes({TEMPLATES: "my_template = { trait = craven }", **traits}) == ["ITEM_MISSING"]
    assert lint_codes({TEMPLATES: "my_template = { dynasty = sometimes }"}) == ["FIELD_EXPECTED_CHOICE"]
    assert lint_codes({TEMPLATES: "my_template = { after_creation = { is_adult = yes } }"}) == ["TRIGGER_IN_EFFECT"]


def test_template_is_registered() -> None:
    data = make_data({TEMPLATES: "my_template = { age = 20 }"})

    assert data.exists(Item.CHARACTER_TEMPLATE, "my_template")
    assert data.db.count(Item.CHARACTER_TEMPLATE) == 1
