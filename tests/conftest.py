import uuid
from datetime import datetime, timedelta
from typing import Optional

import pytest

from garage_crm.core.exceptions import DataAccessError
from garage_crm.db.database import init_db
from garage_crm.db.store import DataStore
from garage_crm.models.crm_models import ClientModel, ClaimModel


class MemoryStore(DataStore):
    """Dict-backed store without transactions, with failure injection.

    ``fail_once`` holds ``(operation, table)`` pairs; the next matching call
    raises DataAccessError and the pair is removed. ``fail_always`` keeps
    raising.
    """

    def __init__(self, clients=(), claims=()):
        self.tables = {
            'clients': {row['id']: dict(row) for row in clients},
            'claims': {row['id']: dict(row) for row in claims},
        }
        self.fail_once = set()
        self.fail_always = set()
        self.calls = []

    def _check(self, operation, table):
        self.calls.append((operation, table))
        key = (operation, table)
        if key in self.fail_always:
            raise DataAccessError(f"{operation} on {table} failed")
        if key in self.fail_once:
            self.fail_once.discard(key)
            raise DataAccessError(f"{operation} on {table} failed")
        if table not in self.tables:
            raise DataAccessError(f"Unknown table: {table}")

    async def select_all(self, table):
        self._check('select_all', table)
        return [dict(row) for row in self.tables[table].values()]

    async def select_by_id(self, table, row_id):
        self._check('select_by_id', table)
        row = self.tables[table].get(row_id)
        return dict(row) if row is not None else None

    async def select_by_ids(self, table, ids):
        self._check('select_by_ids', table)
        return [dict(self.tables[table][i]) for i in ids if i in self.tables[table]]

    async def update(self, table, row_id, patch):
        self._check('update', table)
        if row_id in self.tables[table]:
            self.tables[table][row_id].update(patch)

    async def update_where_in(self, table, column, values, patch):
        self._check('update_where_in', table)
        for row in self.tables[table].values():
            if row.get(column) in values:
                row.update(patch)

    async def delete(self, table, ids):
        self._check('delete', table)
        for row_id in ids:
            self.tables[table].pop(row_id, None)


def client_row(fio, phones=(), company=None, client_id: Optional[str] = None):
    return {
        'id': client_id or str(uuid.uuid4()),
        'fio': fio,
        'company': company,
        'phones': list(phones),
        'inn': None,
        'created_at': None,
    }


def claim_row(client_fio, car_number='', phone='', vin=None, client_id=None, claim_id: Optional[str] = None):
    return {
        'id': claim_id or str(uuid.uuid4()),
        'number': None,
        'client_id': client_id,
        'client_fio': client_fio,
        'client_company': None,
        'phone': phone,
        'phones': [],
        'car_number': car_number,
        'car_brand': '',
        'vin': vin,
        'mileage': 0,
        'status': 'draft',
    }


@pytest.fixture
async def session_factory(tmp_path):
    factory = await init_db(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", create_tables=True)
    yield factory
    await factory.kw['bind'].dispose()


@pytest.fixture
async def seed(session_factory):
    """Insert client/claim dicts (as built by client_row/claim_row) into the database."""
    async def _seed(clients=(), claims=()):
        base = datetime(2024, 1, 1)
        async with session_factory() as session:
            for i, row in enumerate(clients):
                session.add(ClientModel(**{**row, 'created_at': base + timedelta(minutes=i)}))
            await session.flush()
            for i, row in enumerate(claims):
                session.add(ClaimModel(**{**row, 'created_at': base + timedelta(minutes=i)}))
            await session.commit()
    return _seed
