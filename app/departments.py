from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Dict, List

from .logger import get_logger
from .rules import DEFAULT_DEPARTMENT, DEFAULT_DEPARTMENT_NAME, KNOWN_DEPARTMENTS, PROMPT_TEMPLATE

logger = get_logger("departments")


@dataclass(frozen=True)
class DepartmentRule:
    name: str
    prompt: str


def display_name(department: str) -> str:
    # First character only; multi-word or accented codes come out as-is.
    return department[:1].upper() + department[1:]


def build_rule(department: str, department_name: str | None = None) -> DepartmentRule:
    if department_name is None:
        department_name = display_name(department)
    prompt = PROMPT_TEMPLATE.format(department=department, department_name=department_name)
    return DepartmentRule(name=department, prompt=prompt)


class DepartmentRegistry:
    """
    Prompt rules keyed by department code.

    Entries are only ever added. The first rule registered under a code wins;
    later registrations under the same code are ignored.
    """

    def __init__(self) -> None:
        self._rules: Dict[str, DepartmentRule] = {}
        self._lock = threading.Lock()
        self.register(build_rule(DEFAULT_DEPARTMENT, DEFAULT_DEPARTMENT_NAME))

    def register(self, rule: DepartmentRule) -> DepartmentRule:
        with self._lock:
            return self._rules.setdefault(rule.name, rule)

    def get(self, department: str) -> DepartmentRule | None:
        return self._rules.get(department)

    def get_or_create(self, department: str) -> DepartmentRule:
        rule = self._rules.get(department)
        if rule is None:
            rule = self.register(build_rule(department))
            logger.info("Registered prompt rule for department %r", department)
        return rule

    def __contains__(self, department: str) -> bool:
        return department in self._rules

    def __len__(self) -> int:
        return len(self._rules)


def known_departments() -> List[Dict[str, str]]:
    return [{"value": value, "label": label} for value, label in KNOWN_DEPARTMENTS]


registry = DepartmentRegistry()
