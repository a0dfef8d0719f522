from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Tuple


@dataclass(frozen=True)
class StaffPermissionSet:
    """Read permission names held by one staff member, first grant first, no repeats."""
    staff_code: str
    names: Tuple[str, ...] = ()

    def __contains__(self, name: object) -> bool:
        return name in self.names

    def __iter__(self):
        return iter(self.names)

    def __len__(self) -> int:
        return len(self.names)


class PermissionResolver:
    def __init__(self, runner):
        self.runner = runner

    def resolve(self, staff_code: str) -> StaffPermissionSet:
        names: List[str] = []
        for row in self.runner.rows('account.read_permissions', staff_code=staff_code):
            if row['name'] not in names:
                names.append(row['name'])
        return StaffPermissionSet(staff_code=staff_code, names=tuple(names))

    def all_permissions(self, staff_code: str) -> List[Dict[str, str]]:
        return [
            {'type': row['type'], 'name': row['name']}
            for row in self.runner.rows('account.permissions', staff_code=staff_code)
        ]


__all__ = ['StaffPermissionSet', 'PermissionResolver']
