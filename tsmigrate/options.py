"""Migration options."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class MigrateOptions:
    """Names and conventions of the targeted component framework."""

    # Base type names marking a component class (bare or qualified)
    component_bases: tuple[str, ...] = ("Component", "PureComponent")
    state_slot: str = "state"
    props_slot: str = "props"
    state_mutator: str = "setState"
    # Hint member read for declared props
    prop_types_member: str = "propTypes"
    # Props interfaces extend base_attributes<base_attributes_argument>
    base_attributes: str = "React.HTMLAttributes"
    base_attributes_argument: str = "Element"
    props_name_template: str = "I{}Props"
    state_name_template: str = "{}State"
    # Resolved type name -> declared type name
    framework_node_types: dict[str, str] = field(
        default_factory=lambda: {"ReactNode": "React.ReactNode"}
    )
    timer_types: tuple[str, ...] = ("Timer", "NodeJS.Timer", "NodeJS.Timeout")

    def reserved_names(self) -> set[str]:
        """Lowercased names never declared as instance fields on a component."""
        return {
            self.state_slot.lower(),
            self.props_slot.lower(),
            self.state_mutator.lower(),
        }

    def props_type_name(self, class_name: str) -> str:
        return self.props_name_template.format(class_name)

    def state_type_name(self, class_name: str) -> str:
        return self.state_name_template.format(class_name)


DEFAULT_OPTIONS = MigrateOptions()
