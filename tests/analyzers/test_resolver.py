"""Tests for same-file component and props type resolution."""

from __future__ import annotations

from jsxprops.analyzers.resolver import is_component_name
from jsxprops.models import KIND_DEFINITION

BUTTON = """
interface ButtonProps {
  label: string;
  onClick?: () => void;
  size?: "sm" | "md";
}

export function Button({ label, onClick, size = "md", ...rest }: ButtonProps) {
  return <button onClick={onClick}>{label}</button>;
}

export function App() {
  return <Button label="Save" />;
}
"""


def _definition(extraction, name):
    return next(d for d in extraction.definitions if d.component_name == name)


def test_destructured_parameter_with_named_type(extract) -> None:
    extraction = extract(BUTTON, filename="Button.tsx")

    button = _definition(extraction, "Button")
    assert button.kind == KIND_DEFINITION
    assert button.props_interface == "ButtonProps"
    assert [(p.prop_name, p.type_annotation, p.is_spread) for p in button.props] == [
        ("label", "string", False),
        ("onClick", "() => void", False),
        ("size", '"sm" | "md"', False),
        ("...rest", None, True),
    ]


def test_usage_sites_inherit_same_file_interface(extract) -> None:
    extraction = extract(BUTTON, filename="Button.tsx")

    usages = {i.component_name: i for i in extraction.instances}
    assert usages["Button"].props_interface == "ButtonProps"
    assert usages["Button"].enclosing_component == "App"
    assert usages["button"].props_interface is None
    assert usages["button"].enclosing_component == "Button"


def test_include_types_false_drops_type_information(extract) -> None:
    extraction = extract(BUTTON, filename="Button.tsx", include_types=False)

    button = _definition(extraction, "Button")
    assert button.props_interface is None
    assert all(prop.type_annotation is None for prop in button.props)
    assert [p.prop_name for p in button.props][:3] == ["label", "onClick", "size"]
    assert all(instance.props_interface is None for instance in extraction.instances)


def test_generic_function_component_with_member_access(extract) -> None:
    extraction = extract(
        """
        type CardProps = { title: string; footer?: React.ReactNode };

        const Card: React.FC<CardProps> = (props) => (
          <div>
            {props.title}
            {props.footer}
            {props.title}
          </div>
        );
        """,
        filename="Card.tsx",
    )

    card = _definition(extraction, "Card")
    assert card.props_interface == "CardProps"
    assert [(p.prop_name, p.type_annotation) for p in card.props] == [
        ("title", "string"),
        ("footer", "React.ReactNode"),
    ]


def test_class_component_reads_this_props(extract) -> None:
    extraction = extract(
        """
        interface PanelProps {
          heading: string;
        }

        class Panel extends React.Component<PanelProps> {
          render() {
            const { heading } = this.props;
            return <section>{heading}{this.props.children}</section>;
          }
        }
        """,
        filename="Panel.tsx",
    )

    panel = _definition(extraction, "Panel")
    assert panel.props_interface == "PanelProps"
    assert [(p.prop_name, p.type_annotation) for p in panel.props] == [
        ("heading", "string"),
        ("children", None),
    ]


def test_conventional_props_name_is_used_as_fallback(extract) -> None:
    extraction = extract(
        """
        interface AvatarProps {
          src: string;
        }

        const Avatar = ({ src }) => <img src={src} />;
        """,
        filename="Avatar.tsx",
    )

    avatar = _definition(extraction, "Avatar")
    assert avatar.props_interface == "AvatarProps"
    assert avatar.props[0].type_annotation == "string"


def test_inline_object_type_has_no_interface(extract) -> None:
    extraction = extract(
        """
        const Badge = ({ text }: { text: string }) => <span>{text}</span>;
        """,
        filename="Badge.tsx",
    )

    badge = _definition(extraction, "Badge")
    assert badge.props_interface is None
    assert [p.prop_name for p in badge.props] == ["text"]


def test_lowercase_functions_are_not_components(extract) -> None:
    extraction = extract(
        """
        function helper() {
          return <div />;
        }
        """,
        filename="helper.jsx",
    )

    assert extraction.definitions == []
    assert extraction.instances[0].enclosing_component is None


def test_is_component_name() -> None:
    assert is_component_name("Button")
    assert not is_component_name("button")
    assert not is_component_name("")


def test_definition_columns_count_characters(extract) -> None:
    extraction = extract("/* é */ function Card({ title }) { return null; }", filename="Card.jsx")

    card = _definition(extraction, "Card")
    assert card.column == 8
    assert [(p.prop_name, p.column) for p in card.props] == [("title", 24)]
