"""
Merging duplicate clients into a primary client.

The merge is an ordered list of steps, each safe to repeat:

1. union the phone numbers onto the primary client
2. point the duplicates' claims at the primary (refreshing the name and
   company snapshot on those claims)
3. delete the duplicate clients

Stores that support transactions run the steps in one transaction. On stores
that don't, a failure can leave a partial merge behind; calling ``merge``
again with the same arguments finishes it.
"""

import logging
from typing import Iterable, List
from garage_crm.core.exceptions import DataAccessError, MergeError, NotFoundError
from garage_crm.core.normalizer import format_phone, normalize_phone, phone_key
from garage_crm.core.records import Client, MergeResult

logger = logging.getLogger(__name__)

def merge_phones(phone_lists: Iterable[Iterable[str]]) -> List[str]:
    """Union phone lists, first occurrence wins, stored in display format."""
    merged = {}
    for phones in phone_lists:
        for phone in phones:
            key = phone_key(phone)
            if not key or key in merged:
                continue
            merged[key] = format_phone(normalize_phone(phone))
    return list(merged.values())

class ClientMerger:
    def __init__(self, store):
        self.store = store

    async def merge(self, primary_client_id: str, duplicate_client_ids: List[str]) -> MergeResult:
        duplicate_ids = [
            client_id for client_id in dict.fromkeys(duplicate_client_ids)
            if client_id != primary_client_id
        ]
        if not duplicate_ids:
            raise MergeError("No duplicate clients to merge")

        async with self.store.transaction():
            row = await self.store.select_by_id('clients', primary_client_id)
            if row is None:
                raise NotFoundError('Client', primary_client_id)
            primary = Client.from_row(row)

            duplicates = [Client.from_row(r) for r in await self.store.select_by_ids('clients', duplicate_ids)]
            missing = set(duplicate_ids) - {d.id for d in duplicates}
            if missing:
                # Already deleted by an earlier run of this merge
                logger.warning(f"Duplicate clients not found, skipping: {sorted(missing)}")

            phones = merge_phones([primary.phones] + [d.phones for d in duplicates])

            await self._step(
                'update_phones',
                self.store.update('clients', primary.id, {'phones': phones})
            )
            await self._step(
                'reassign_claims',
                self.store.update_where_in('claims', 'client_id', duplicate_ids, {
                    'client_id': primary.id,
                    'client_fio': primary.fio,
                    'client_company': primary.company
                })
            )
            await self._step(
                'delete_duplicates',
                self.store.delete('clients', duplicate_ids)
            )

        logger.info(f"Merged {len(duplicate_ids)} client(s) into {primary.id}")
        return MergeResult(
            merged_count=len(duplicate_ids),
            primary_client=Client(
                id=primary.id,
                fio=primary.fio,
                company=primary.company,
                phones=tuple(phones),
                inn=primary.inn,
                created_at=primary.created_at
            )
        )

    async def _step(self, name: str, operation):
        logger.info(f"Merge step '{name}'")
        try:
            await operation
        except DataAccessError as e:
            logger.exception(f"Merge step '{name}' failed")
            raise MergeError(f"Merge failed at step '{name}': {e}", step=name) from e
