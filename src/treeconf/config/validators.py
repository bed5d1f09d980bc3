"""Per-key validator registry."""

from __future__ import annotations

from collections.abc import Callable

from .errors import ValidationError
from .values import Deferred, resolve_value

type Validator = Callable[[str, object], object]

__all__ = ["Validator", "ValidatorRegistry"]


class ValidatorRegistry:
    """Ordered validators keyed by canonical key.

    A validator receives ``(key, value)``. It rejects the value by raising, or
    by returning ``False`` which is reported as a :class:`ValidationError`.
    """

    def __init__(self) -> None:
        self._validators: dict[str, list[Validator]] = {}

    def register(self, key: str, validator: Validator) -> None:
        if not callable(validator):
            raise TypeError(f"Validator for '{key}' must be callable, got {type(validator).__name__}.")
        self._validators.setdefault(key, []).append(validator)

    def validators_for(self, key: str) -> tuple[Validator, ...]:
        return tuple(self._validators.get(key, ()))

    def assert_valid(self, key: str, value: object) -> None:
        for validator in self._validators.get(key, ()):
            if validator(key, value) is False:
                raise ValidationError(f"Invalid value {value!r} for key '{key}'.")

    def defer(self, key: str, deferred: Deferred) -> Deferred:
        """Wrap ``deferred`` so its result is validated each time it is produced."""

        def _produce_validated() -> object:
            value = resolve_value(deferred)
            self.assert_valid(key, value)
            return value

        return Deferred(_produce_validated)

    def __contains__(self, key: object) -> bool:
        return key in self._validators

    def __len__(self) -> int:
        return len(self._validators)

    def keys(self) -> list[str]:
        return list(self._validators)
