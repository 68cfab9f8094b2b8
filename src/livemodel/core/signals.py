from typing import Type


def signal_name(owner: Type, field_name: str) -> str:
    """Binding name for a view-model field: `$Namespace.field` or `$field`."""
    if getattr(owner, "use_namespace", True):
        namespace = getattr(owner, "signal_namespace", None) or owner.__name__
        return f"${namespace}.{field_name}"
    return f"${field_name}"


class SignalDescriptor:
    """Return `$Model.field` on the class, the field's observable on an instance."""

    def __init__(self, field_name: str) -> None:
        self.field_name = field_name

    def __get__(self, instance, owner):
        #  class access  →  owner is the view-model class, instance is None
        if instance is None:
            return signal_name(owner, self.field_name)

        #  instance access  →  read-only observable for the field
        return instance.observable(self.field_name)

    def __repr__(self):
        return f"SignalDescriptor({self.field_name})"
