"""Central enum-like definitions to avoid typos in permission/module strings.
Permission names are stored data; never rename one silently, add the new name and migrate grants.
"""
from __future__ import annotations
from enum import Enum
from typing import Dict, List


class ModuleTag(str, Enum):
    REQUISITION = 'Requisition'
    QUOTATION_REQUEST = 'QuotationRequest'
    QUOTATION_REGISTRATION = 'QuotationRegistration'
    ORDER = 'Order'
    RECEIPT = 'Receipt'
    RETURN = 'Return'
    QUALITY_CHECK = 'QualityCheck'
    STOCK_REFILL = 'StockRefill'
    JUST_IN_TIME = 'JustInTime'
    MATERIAL_PLANNING = 'MaterialPlanning'


PERM_REQUISITION = 'PurchaseRequisition'
PERM_QUOTATION_REQUEST = 'RequestForQuotation'
PERM_QUOTATION_REGISTRATION = 'RegisterQuotation'
PERM_ORDER = 'PurchaseOrder'
PERM_RECEIPT = 'GRNInfo'
PERM_RETURN = 'GoodsReturnInfo'
PERM_QUALITY_CHECK = 'QualityCheckInfo'
PERM_STOCK_PLANNING = 'StockPlanning'

# Permission name -> module whose events it makes visible. StockPlanning maps to no single
# module; the selector's matrix chooses its sources.
PERMISSION_MODULES: Dict[str, ModuleTag] = {
    PERM_REQUISITION: ModuleTag.REQUISITION,
    PERM_QUOTATION_REQUEST: ModuleTag.QUOTATION_REQUEST,
    PERM_QUOTATION_REGISTRATION: ModuleTag.QUOTATION_REGISTRATION,
    PERM_ORDER: ModuleTag.ORDER,
    PERM_RECEIPT: ModuleTag.RECEIPT,
    PERM_RETURN: ModuleTag.RETURN,
    PERM_QUALITY_CHECK: ModuleTag.QUALITY_CHECK,
}

# Which types each calendar permission exists in (Read drives calendar visibility)
PERMISSION_CATALOG: Dict[str, List[str]] = {
    PERM_REQUISITION: ['Read', 'Write', 'Approve'],
    PERM_QUOTATION_REQUEST: ['Read', 'Write'],
    PERM_QUOTATION_REGISTRATION: ['Read', 'Write', 'Approve'],
    PERM_ORDER: ['Read', 'Write', 'Approve'],
    PERM_RECEIPT: ['Read', 'Write'],
    PERM_RETURN: ['Read', 'Write'],
    PERM_QUALITY_CHECK: ['Read', 'Write'],
    PERM_STOCK_PLANNING: ['Read', 'Write', 'Approve'],
}
