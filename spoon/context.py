"""Emission context — mutable per-run state shared by every handler."""

from __future__ import annotations

from dataclasses import dataclass, field

from .compile_types import ClassState
from .namespace import Namespace
from . import constants


@dataclass
class EmissionContext:
    """State threaded through one compilation run.

    The program class is the outermost entry of ``class_names`` and counts
    as top level; only a class nested inside it switches ``class_state``
    to ``IN_CLASS``.
    """

    program_name: str
    class_names: list[str] = field(default_factory=list)
    class_state: ClassState = ClassState.TOP_LEVEL
    scope: Namespace = field(default_factory=Namespace)
    class_scope: Namespace = field(default_factory=Namespace)
    instance_scope: Namespace = field(default_factory=Namespace)
    temp_counter: int = 0

    @property
    def in_class(self) -> bool:
        return self.class_state == ClassState.IN_CLASS

    @property
    def current_class(self) -> str:
        return self.class_names[-1]

    def enter_class(self, name: str):
        self.class_names.append(name)
        self._update_class_state()

    def exit_class(self) -> str:
        name = self.class_names.pop()
        self._update_class_state()
        return name

    def _update_class_state(self):
        nested = len(self.class_names) > 1
        self.class_state = ClassState.IN_CLASS if nested else ClassState.TOP_LEVEL

    def fresh_temp(self) -> str:
        name = f"{constants.TEMP_PREFIX}{self.temp_counter}"
        self.temp_counter += 1
        return name
