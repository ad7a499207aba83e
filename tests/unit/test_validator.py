"""Tests for the validation engine."""

import pytest
from hypothesis import given, settings as hypothesis_settings, strategies as st

from sdui.models import (
    ApiCallAction,
    ButtonComponent,
    CardComponent,
    ChipComponent,
    ColumnComponent,
    CustomAction,
    DividerComponent,
    GridComponent,
    ImageComponent,
    ListComponent,
    NavigateAction,
    Padding,
    ProgressBarComponent,
    RadioButtonComponent,
    ShowDialogAction,
    SliderComponent,
    SpacerComponent,
    Style,
    TextComponent,
    TextFieldComponent,
    UpdateStateAction,
)
from sdui.validation import Severity, ValidationReport


def _errors(issues):
    return [i for i in issues if i.severity is Severity.ERROR]


def _warnings(issues):
    return [i for i in issues if i.severity is Severity.WARNING]


# ============================================================================
# Decoded scenarios
# ============================================================================

@pytest.mark.unit
def test_slider_out_of_range(codec, validator):
    """Slider value above maxValue is exactly one Error."""
    node = codec.decode('{"type":"Slider","value":150,"minValue":0,"maxValue":100}')

    issues = validator.validate(node)

    assert len(issues) == 1
    assert issues[0].severity is Severity.ERROR
    assert "between minValue" in issues[0].message
    assert issues[0].field == "value"
    assert issues[0].value == 150


@pytest.mark.unit
def test_empty_column_is_warning(codec, validator):
    """Empty container warns but stays valid."""
    node = codec.decode('{"type":"Column","children":[]}')

    report = validator.report(node)

    assert len(report.warnings) == 1
    assert "no children" in report.warnings[0].message
    assert report.errors == []
    assert report.is_valid is True


@pytest.mark.unit
def test_valid_document(codec, validator, sample_document):
    """A well-formed document has no issues."""
    assert validator.validate(codec.decode(sample_document)) == []


# ============================================================================
# Common fields
# ============================================================================

@pytest.mark.unit
def test_blank_id_warns(validator):
    """Test blank id."""
    issues = validator.validate(TextComponent(id="  ", text="Hi"))

    assert len(issues) == 1
    assert issues[0].severity is Severity.WARNING
    assert issues[0].field == "id"


@pytest.mark.unit
def test_style_numeric_bounds(validator):
    """Test style range checks and their severities."""
    style = Style(
        font_size=0,
        corner_radius=-1,
        opacity=1.5,
        scale=0,
        z_index=-2,
        rotation=400,
        shadow_offset_x=-150,
    )

    issues = validator.validate(TextComponent(id="t", text="Hi", style=style))

    errors = {i.field for i in _errors(issues)}
    warnings = {i.field for i in _warnings(issues)}
    assert errors == {
        "style.fontSize",
        "style.cornerRadius",
        "style.opacity",
        "style.scale",
        "style.zIndex",
    }
    assert warnings == {"style.rotation", "style.shadowOffsetX"}


@pytest.mark.unit
def test_style_strings(validator):
    """Dimensions, colors and keywords are checked."""
    style = Style(
        width="wide",
        max_height="120%",
        background_color="red",
        border_color="#12345",
        font_weight="heavy",
        justify_content="FLEX-START",
        align_items="middle",
        padding=Padding(top=-4),
    )

    issues = validator.validate(TextComponent(id="t", text="Hi", style=style))

    assert {i.field for i in issues} == {
        "style.width",
        "style.maxHeight",
        "style.backgroundColor",
        "style.borderColor",
        "style.fontWeight",
        "style.alignItems",
        "style.padding.top",
    }
    assert all(i.severity is Severity.ERROR for i in issues)


# ============================================================================
# Variant rules
# ============================================================================

@pytest.mark.unit
@pytest.mark.parametrize(
    "node,field",
    [
        (TextComponent(id="x", text="   "), "text"),
        (ButtonComponent(id="x", text=""), "text"),
        (ChipComponent(id="x", text=""), "text"),
        (ImageComponent(id="x", url=""), "url"),
        (GridComponent(id="x", columns=0, items=(TextComponent(id="c", text="a"),)), "columns"),
        (ProgressBarComponent(id="x", progress=1.2), "progress"),
        (DividerComponent(id="x", thickness=0), "thickness"),
        (DividerComponent(id="x", color="blue"), "color"),
        (SliderComponent(id="x", min_value=10, max_value=10), "minValue"),
        (SliderComponent(id="x", step=0), "step"),
        (TextComponent(id="x", text="a", max_lines=0), "maxLines"),
        (TextComponent(id="x", text="a", text_overflow="fade"), "textOverflow"),
        (TextFieldComponent(id="x", keyboard_type="emoji"), "keyboardType"),
        (TextFieldComponent(id="x", is_password=True, value="hunter2"), "value"),
        (SpacerComponent(id="x", height=-8), "height"),
    ],
)
def test_variant_errors(validator, node, field):
    """Each structural rule reports one Error on its field."""
    issues = validator.validate(node)

    assert [(i.field, i.severity) for i in issues] == [(field, Severity.ERROR)]


@pytest.mark.unit
@pytest.mark.parametrize(
    "node,field",
    [
        (RadioButtonComponent(id="x"), "group"),
        (SpacerComponent(id="x"), "width"),
        (ImageComponent(id="x", url="ftp://host/a.png"), "url"),
        (CardComponent(id="x"), "children"),
        (ListComponent(id="x"), "items"),
    ],
)
def test_variant_warnings(validator, node, field):
    """Advisory rules report Warnings."""
    issues = validator.validate(node)

    assert [(i.field, i.severity) for i in issues] == [(field, Severity.WARNING)]


@pytest.mark.unit
def test_image_data_uri_ok(validator):
    """Test data URIs are accepted."""
    assert validator.validate(ImageComponent(id="i", url="data:image/png;base64,AAAA")) == []


# ============================================================================
# Actions
# ============================================================================

@pytest.mark.unit
@pytest.mark.parametrize(
    "action,expected",
    [
        (ApiCallAction(url=" "), [("action.url", Severity.ERROR)]),
        (ApiCallAction(url="/x", method="FETCH"), [("action.method", Severity.WARNING)]),
        (ApiCallAction(url="/x", on_success="refresh"), [("action.onSuccess", Severity.WARNING)]),
        (UpdateStateAction(key="", value="1"), [("action.key", Severity.ERROR)]),
        (CustomAction(action=" "), [("action.action", Severity.ERROR)]),
        (
            ShowDialogAction(title="t", message="m", dialog_type="fatal"),
            [("action.dialogType", Severity.WARNING)],
        ),
        (NavigateAction(), [("action.route", Severity.INFO)]),
        (NavigateAction(payload={"route": "home"}), []),
    ],
)
def test_action_rules(validator, action, expected):
    """Test checks on a node's action."""
    issues = validator.validate(ButtonComponent(id="b", text="Go", action=action))

    assert [(i.field, i.severity) for i in issues] == expected


# ============================================================================
# Recursion
# ============================================================================

@pytest.mark.unit
def test_child_issue_prefixes_and_order(validator):
    """Parent issues come first, then each child in order, prefixed."""
    tree = ColumnComponent(
        id="root",
        style=Style(opacity=2),
        children=(
            ListComponent(
                id="list",
                items=(
                    TextComponent(id="ok", text="fine"),
                    TextComponent(id="bad", text=""),
                ),
            ),
            ButtonComponent(id="btn", text=""),
        ),
    )

    issues = validator.validate(tree)

    assert [i.component_id for i in issues] == ["root", "bad", "btn"]
    assert issues[1].message.startswith("Child[0]: Item[1]: ")
    assert issues[1].path == "children[0].items[1]"
    assert issues[2].message.startswith("Child[1]: ")
    assert issues[2].path == "children[1]"
    assert issues[0].path == ""


@pytest.mark.unit
def test_validate_all(validator):
    """Results concatenate per root."""
    issues = validator.validate_all(
        [ButtonComponent(id="a", text=""), ColumnComponent(id="b")]
    )

    assert [i.component_id for i in issues] == ["a", "b"]


@pytest.mark.unit
def test_report_to_dict(validator):
    """Test report export."""
    report = validator.report(ColumnComponent(id="c", children=(ButtonComponent(id="b", text=""),)))

    data = report.to_dict()
    assert data["is_valid"] is False
    assert data["error_count"] == 1
    assert data["issues"][0]["severity"] == "error"
    assert isinstance(report, ValidationReport)


@pytest.mark.unit
def test_rule_crash_becomes_issue(validator, mocker):
    """An exception inside a rule is reported, not raised."""
    mocker.patch.object(validator, "_check_style", side_effect=RuntimeError("boom"))

    issues = validator.validate(TextComponent(id="t", text="Hi", style=Style()))

    assert len(issues) == 1
    assert issues[0].severity is Severity.ERROR
    assert "boom" in issues[0].message


@pytest.mark.unit
def test_metrics_counted(validator, metrics):
    """Test issues are counted by severity."""
    validator.validate(ColumnComponent(id="c"))

    assert metrics.registry.get_sample_value(
        "sdui_validation_issues_total", {"severity": "warning"}
    ) == 1


_nodes = st.one_of(
    st.builds(TextComponent, id=st.just("t"), text=st.text(max_size=5)),
    st.builds(
        SliderComponent,
        id=st.just("s"),
        value=st.floats(-10, 110, allow_nan=False),
        min_value=st.floats(-10, 50, allow_nan=False),
    ),
    st.builds(ProgressBarComponent, id=st.just("p"), progress=st.floats(-1, 2, allow_nan=False)),
)


@given(st.lists(_nodes, max_size=4))
@hypothesis_settings(max_examples=50)
def test_validation_is_deterministic(children):
    """Same tree, same issues, same order."""
    from sdui.validation import ComponentValidator

    validator = ComponentValidator()
    tree = ColumnComponent(id="root", children=tuple(children))

    assert validator.validate(tree) == validator.validate(tree)
