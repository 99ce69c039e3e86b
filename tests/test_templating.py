from photovary.domain.models import AdjustmentParams, DEFAULT_FILENAME_PATTERN
from photovary.services.export.templating import FilenameTemplater

PARAMS = AdjustmentParams(
    contrast=-12, lightness=30, color_temperature=-88, sharpen=0.3, saturation=7, highlight=150
)


def test_default_label_lists_every_value():
    name = FilenameTemplater().render_variant(DEFAULT_FILENAME_PATTERN, "beach", PARAMS)
    assert name == (
        "beach_contrast[-12]_lightness[30]_colorTemperature[-88]"
        "_sharpen[0.3]_saturation[7]_highlight[150]"
    )


def test_none_pattern_uses_default():
    templater = FilenameTemplater()
    assert templater.render_variant(None, "x", PARAMS) == templater.render_variant(
        DEFAULT_FILENAME_PATTERN, "x", PARAMS
    )


def test_custom_pattern_with_all_values():
    pattern = "{{ original_name }}-{{ variant }}-{{ contrast }}_{{ lightness }}_{{ color_temperature }}_{{ sharpen }}_{{ saturation }}_{{ highlight }}"
    name = FilenameTemplater().render_variant(pattern, "beach", PARAMS, variant=3)
    assert name == "beach-3--12_30_-88_0.3_7_150"


def test_pattern_missing_values_falls_back():
    templater = FilenameTemplater()
    name = templater.render_variant("{{ original_name }}_{{ variant }}", "beach", PARAMS, variant=1)
    assert name == templater.render_variant(DEFAULT_FILENAME_PATTERN, "beach", PARAMS)


def test_broken_pattern_falls_back():
    templater = FilenameTemplater()
    name = templater.render_variant("{{ original_name ", "beach", PARAMS)
    assert name.startswith("beach_contrast[-12]")


def test_render_sanitizes_separators():
    templater = FilenameTemplater()
    assert templater.render("{{ a }}/{{ b }}", {"a": "x", "b": "y\\z"}) == "x_y_z"


def test_render_exposes_date():
    rendered = FilenameTemplater().render("{{ date }}", {})
    assert len(rendered) == 10
    assert rendered[4] == "-"


def test_default_label_prints_sharpen_compactly():
    templater = FilenameTemplater()
    zero = templater.render_variant(None, "beach", AdjustmentParams(sharpen=0.0))
    negative = templater.render_variant(None, "beach", AdjustmentParams(sharpen=-0.1))
    assert "_sharpen[0]_" in zero
    assert "_sharpen[-0.1]_" in negative


def test_pattern_dropping_a_field_falls_back_even_if_digits_match():
    """saturation=5 also appears inside highlight=150, but is still missing."""
    params = AdjustmentParams(contrast=50, lightness=0, color_temperature=15, sharpen=0.0, saturation=5, highlight=150)
    pattern = (
        "{{ original_name }}_{{ contrast }}_{{ lightness }}_{{ color_temperature }}"
        "_{{ sharpen }}_{{ highlight }}"
    )
    templater = FilenameTemplater()
    assert templater.missing_fields(pattern) == ["saturation"]
    name = templater.render_variant(pattern, "beach", params)
    assert name == templater.render_variant(DEFAULT_FILENAME_PATTERN, "beach", params)
    assert "_saturation[5]_" in name
