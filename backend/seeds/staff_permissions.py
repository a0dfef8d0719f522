"""Seed definitions for demo staff & their permission grants.
(Consumed by scripts/seed_demo.py; kept as data so tests can assert against it.)
"""
from p2p.constants.permissions import (
    PERM_REQUISITION, PERM_QUOTATION_REQUEST, PERM_QUOTATION_REGISTRATION, PERM_ORDER,
    PERM_RECEIPT, PERM_RETURN, PERM_QUALITY_CHECK, PERM_STOCK_PLANNING,
)

STAFF = [
    {'code': 'ST001', 'full_name': 'Alice', 'email': 'alice@example.com', 'department': 'Purchase'},
    {'code': 'ST002', 'full_name': 'Bilal', 'email': 'bilal@example.com', 'department': 'Stores'},
    {'code': 'ST003', 'full_name': 'Chitra', 'email': 'chitra@example.com', 'department': 'Quality'},
    {'code': 'ST004', 'full_name': 'Dev', 'email': 'dev@example.com', 'department': 'Planning'},
]

# Staff code -> (type, name) grants. Read grants decide calendar visibility.
GRANTS = {
    'ST001': [('Read', PERM_REQUISITION), ('Write', PERM_REQUISITION), ('Read', PERM_QUOTATION_REQUEST)],
    'ST002': [('Read', PERM_ORDER), ('Read', PERM_RECEIPT), ('Read', PERM_RETURN), ('Write', PERM_RECEIPT)],
    'ST003': [('Read', PERM_QUALITY_CHECK), ('Write', PERM_QUALITY_CHECK), ('Read', PERM_QUOTATION_REGISTRATION)],
    'ST004': [('Read', PERM_STOCK_PLANNING), ('Approve', PERM_STOCK_PLANNING), ('Read', PERM_REQUISITION)],
}
