"""Search Index Publisher Module

Uploads enriched article records to an Algolia index and blocks until
Algolia reports the indexing tasks as published.

Records are saved as-is; Algolia uses each record's ``objectID`` as the
primary key, so re-running the pipeline over the same source overwrites
rather than duplicates. Delivery is not exactly-once: a failure after
some batches were accepted leaves those batches indexed.
"""

import logging
import time
from typing import Any, Dict, List

from algoliasearch.search.client import SearchClientSync

from .config import Settings
from .exceptions import ConfigurationError, PublishError

logger = logging.getLogger(__name__)


class AlgoliaPublisher:
    """Publishes records to a single Algolia index.

    Args:
        client: Algolia search client (``SearchClientSync`` or compatible)
        index_name: Name of the target index
    """

    def __init__(self, client: Any, index_name: str):
        self._client = client
        self.index_name = index_name

    def publish(self, records: List[Dict[str, Any]]) -> List[int]:
        """Save records and wait for every resulting indexing task.

        Args:
            records: Enriched records, in the order they should be sent

        Returns:
            Algolia task ids, one per uploaded batch

        Raises:
            PublishError: If the upload fails, returns no task id, or a
                task cannot be awaited
        """
        if not records:
            logger.warning("No records to publish to index %s", self.index_name)
            return []

        logger.info(
            "Saving %d records to Algolia index %s", len(records), self.index_name
        )
        try:
            responses = self._client.save_objects(
                index_name=self.index_name,
                objects=records,
            )
        except Exception as exc:
            raise PublishError(
                f"Algolia save_objects failed for index {self.index_name}: {exc}"
            ) from exc

        task_ids: List[int] = []
        for response in responses or []:
            task_id = getattr(response, "task_id", None)
            if task_id is None:
                raise PublishError(
                    f"Algolia indexing task ID missing from save_objects response: {response!r}"
                )
            task_ids.append(task_id)

        if not task_ids:
            raise PublishError(
                f"Algolia save_objects returned no batch responses: {responses!r}"
            )

        for task_id in task_ids:
            t0 = time.time()
            logger.info("Indexing task %s submitted. Waiting for task to complete...", task_id)
            try:
                self._client.wait_for_task(index_name=self.index_name, task_id=task_id)
            except Exception as exc:
                raise PublishError(
                    f"Failed waiting for Algolia task {task_id} on index {self.index_name}: {exc}"
                ) from exc
            logger.info("✓ Task %s completed in %.2fs", task_id, time.time() - t0)

        logger.info(
            "Successfully indexed %d records to Algolia index %s",
            len(records),
            self.index_name,
        )
        return task_ids


def build_publisher(settings: Settings, index_name: str | None = None) -> AlgoliaPublisher:
    """Construct an ``AlgoliaPublisher`` from settings.

    Raises:
        ConfigurationError: If Algolia credentials are missing
    """
    if not settings.algolia_app_id or not settings.algolia_admin_api_key:
        raise ConfigurationError(
            "ALGOLIA_APP_ID and ALGOLIA_ADMIN_API_KEY are required to publish"
        )
    client = SearchClientSync(settings.algolia_app_id, settings.algolia_admin_api_key)
    return AlgoliaPublisher(client, index_name or settings.index_name)
