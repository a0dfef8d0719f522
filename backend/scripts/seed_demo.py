#!/usr/bin/env python
"""Idempotent seed script for the permission catalog, demo staff & grants.

Usage:
    python backend/scripts/seed_demo.py                 # seed normally
    python backend/scripts/seed_demo.py --show-grants   # print staff -> permission summary
    python backend/scripts/seed_demo.py --dry-run       # run logic then rollback (no DB changes)
    python backend/scripts/seed_demo.py --with-documents  # also add one requisition for the first staff member
"""
from __future__ import annotations
import os, sys, argparse, textwrap
from datetime import datetime, date, timedelta
from sqlalchemy import select, text

# Allow running from repo root
sys.path.append(os.path.abspath('backend'))

from p2p import create_app, get_db  # type: ignore
from p2p.models.staff import Base, Staff, Permission, StaffPermission, Item
from p2p.models.requisition import PurchaseRequisition, RequisitionItem
from p2p.constants.permissions import PERMISSION_CATALOG
from seeds.staff_permissions import STAFF, GRANTS


def ensure_permissions(session):
    existing = {(p.type, p.name) for p in session.execute(select(Permission)).scalars().all()}
    created = 0
    for name, types in PERMISSION_CATALOG.items():
        for perm_type in types:
            if (perm_type, name) not in existing:
                session.add(Permission(type=perm_type, name=name))
                created += 1
    session.flush()
    return created


def ensure_staff(session):
    existing = {s.code for s in session.execute(select(Staff)).scalars().all()}
    created = 0
    for row in STAFF:
        if row['code'] not in existing:
            session.add(Staff(**row))
            created += 1
    session.flush()
    return created


def ensure_grants(session):
    perms = {(p.type, p.name): p for p in session.execute(select(Permission)).scalars().all()}
    created = 0
    for staff_code, grants in GRANTS.items():
        current = {sp.permission_id for sp in session.execute(
            select(StaffPermission).where(StaffPermission.staff_code == staff_code)).scalars()}
        for key in grants:
            perm = perms.get(key)
            if perm is None:
                print(f"[WARN] Missing permission referenced by {staff_code}: {key[0]} {key[1]}")
                continue
            if perm.id not in current:
                session.add(StaffPermission(staff_code=staff_code, permission_id=perm.id))
                created += 1
    return created


def ensure_demo_requisition(session):
    if session.get(PurchaseRequisition, 'PR-DEMO-1'):
        return 0
    owner = STAFF[0]['code']
    for code, name in (('ITM-1', 'Steel Rod'), ('ITM-2', 'Copper Wire')):
        if not session.get(Item, code):
            session.add(Item(code=code, name=name))
    session.add(PurchaseRequisition(
        code='PR-DEMO-1', description='Demo requisition', required_date=date.today() + timedelta(days=7),
        status='Pending', priority='High', added_by=owner, added_date=datetime.now(),
    ))
    session.flush()
    session.add_all([
        RequisitionItem(code='PRI-DEMO-1', pr_code='PR-DEMO-1', item_code='ITM-1', required_quantity=10),
        RequisitionItem(code='PRI-DEMO-2', pr_code='PR-DEMO-1', item_code='ITM-2', required_quantity=25),
    ])
    return 1


def print_grant_summary(session):
    rows = []
    for staff in session.execute(select(Staff).order_by(Staff.code)).scalars().all():
        names = sorted(f"{sp.permission.type}:{sp.permission.name}" for sp in staff.permissions)
        rows.append((staff.code, staff.full_name, names))
    if not rows:
        print("[INFO] No staff present.")
        return
    print(f"{'Staff'.ljust(8)} | {'Name'.ljust(10)} | Grants")
    print('-' * 60)
    for code, name, names in rows:
        print(f"{code.ljust(8)} | {name.ljust(10)} | {', '.join(names)}")


def parse_args():
    p = argparse.ArgumentParser(
        description="Seed permission catalog, demo staff & grants",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent("""Examples:\n  seed normally: seed_demo.py\n  dry run: seed_demo.py --dry-run\n  show grants: seed_demo.py --show-grants\n""")
    )
    p.add_argument('--show-grants', action='store_true', help='Print staff permission grants after seeding')
    p.add_argument('--dry-run', action='store_true', help='Rollback after operations (no commit)')
    p.add_argument('--with-documents', action='store_true', help='Also seed a demo requisition with two items')
    return p.parse_args()


def main():
    args = parse_args()
    app = create_app()
    with app.app_context():
        session = get_db()
        try:
            session.execute(text('SELECT 1 FROM permissions LIMIT 1'))
        except Exception:
            # Bootstrap only; real environments run `alembic upgrade head`
            session.rollback()
            import p2p.models.requisition, p2p.models.quotation, p2p.models.purchase_order  # noqa: F401,E401
            import p2p.models.receipt, p2p.models.quality_check, p2p.models.stock_planning  # noqa: F401,E401
            import p2p.models.notification  # noqa: F401
            Base.metadata.create_all(session.get_bind())
        finally:
            session.commit()

    with app.app_context():
        session = get_db()
        try:
            created_p = ensure_permissions(session)
            created_s = ensure_staff(session)
            created_g = ensure_grants(session)
            created_d = ensure_demo_requisition(session) if args.with_documents else 0
            if args.dry_run:
                session.rollback()
                print(f"[DRY-RUN] (rolled back) Permissions: {created_p}, Staff: {created_s}, Grants: {created_g}, Documents: {created_d}")
            else:
                session.commit()
                print(f"[DONE] Permissions: {created_p}, Staff: {created_s}, Grants: {created_g}, Documents: {created_d}")
            if args.show_grants:
                print('\nStaff Grant Summary:')
                print_grant_summary(session)
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()


if __name__ == '__main__':
    main()
