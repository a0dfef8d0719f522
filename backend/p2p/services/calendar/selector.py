from __future__ import annotations
from typing import Dict, Iterable, List, Tuple
from p2p.constants.permissions import (
    ModuleTag, PERMISSION_MODULES, PERM_STOCK_PLANNING, PERM_REQUISITION, PERM_ORDER,
)

# (has_requisition, has_order) -> stock-planning sources, applied only with StockPlanning.
# The (True, True) and (False, False) rows are the same.
STOCK_PLANNING_MATRIX: Dict[Tuple[bool, bool], Tuple[ModuleTag, ...]] = {
    (True, True): (ModuleTag.STOCK_REFILL, ModuleTag.MATERIAL_PLANNING, ModuleTag.JUST_IN_TIME),
    (True, False): (ModuleTag.STOCK_REFILL, ModuleTag.MATERIAL_PLANNING),
    (False, True): (ModuleTag.JUST_IN_TIME,),
    (False, False): (ModuleTag.STOCK_REFILL, ModuleTag.MATERIAL_PLANNING, ModuleTag.JUST_IN_TIME),
}


def select_sources(permissions: Iterable[str]) -> Tuple[ModuleTag, ...]:
    """Ordered module tags whose events the permission names make visible.

    Stock-planning sources come first, then one tag per recognised permission
    in the order given. Unknown names are ignored and no tag repeats.
    """
    names = list(permissions)
    present = set(names)
    selected: List[ModuleTag] = []
    if PERM_STOCK_PLANNING in present:
        key = (PERM_REQUISITION in present, PERM_ORDER in present)
        selected.extend(STOCK_PLANNING_MATRIX[key])
    for name in names:
        tag = PERMISSION_MODULES.get(name)
        if tag is not None and tag not in selected:
            selected.append(tag)
    return tuple(selected)


__all__ = ['STOCK_PLANNING_MATRIX', 'select_sources']
