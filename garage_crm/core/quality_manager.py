from typing import List, Optional, Tuple
import logging
from garage_crm.config import Settings
from garage_crm.core.detector import detect
from garage_crm.core.exceptions import DataAccessError
from garage_crm.core.merge import ClientMerger
from garage_crm.core.records import Client, Claim, QualityReport, MergeResult

logger = logging.getLogger(__name__)

class QualityManager:
    def __init__(self, store, settings: Optional[Settings] = None):
        self.store = store
        self.settings = settings or Settings()

    async def get_all_clients(self) -> List[Client]:
        """Retrieve all clients from the store."""
        return [Client.from_row(row) for row in await self.store.select_all('clients')]

    async def get_all_claims(self) -> List[Claim]:
        """Retrieve all claims from the store."""
        return [Claim.from_row(row) for row in await self.store.select_all('claims')]

    async def detect_quality_issues(self) -> QualityReport:
        """Build the duplicate and validation report for the current data.

        A table that fails to load is reported in ``errors`` and treated as
        empty, so the passes that don't need it still produce results.
        """
        errors = []
        clients, failed = await self._load('clients', self.get_all_clients)
        errors.extend(failed)
        claims, failed = await self._load('claims', self.get_all_claims)
        errors.extend(failed)

        logger.info(f"Checking data quality for {len(clients)} clients and {len(claims)} claims")
        report = detect(clients, claims, self.settings, errors)
        logger.info(
            f"Found {len(report.phone_duplicates)} phone, {len(report.fio_duplicates)} name "
            f"and {len(report.car_number_duplicates)} car number group(s), "
            f"{len(report.validation_issues)} validation issue(s)"
        )
        return report

    async def _load(self, table: str, loader) -> Tuple[list, List[str]]:
        try:
            return await loader(), []
        except DataAccessError:
            logger.exception(f"Could not load {table}")
            return [], [table]

    async def merge_clients(self, primary_client_id: str, duplicate_client_ids: List[str]) -> MergeResult:
        """Merge duplicate clients into the primary one and delete them."""
        logger.info(f"Merging {duplicate_client_ids} into client {primary_client_id}")
        return await ClientMerger(self.store).merge(primary_client_id, duplicate_client_ids)
