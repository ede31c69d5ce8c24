"""Map provider conversation ids back to pipeline sheet rows."""

from __future__ import annotations

from structlog import get_logger

from hiring_pipeline.services.rubrics import Rubric
from hiring_pipeline.types import RecordStore

logger = get_logger()


class ConversationCorrelator:
    """
    Reverse lookup over the conversation id column.

    The video trigger writes each new conversation id into the stage's
    correlation column of the candidate's row, so a scan of that column is
    the index. The column is read fresh on every lookup; nothing is cached
    between callbacks.
    """

    def __init__(self, record_store: RecordStore, spreadsheet_id: str) -> None:
        self.record_store = record_store
        self.spreadsheet_id = spreadsheet_id

    async def find_row_by_conversation_id(
        self, conversation_id: str | None, rubric: Rubric
    ) -> int | None:
        """
        Find the row whose conversation id cell matches.

        Args:
            conversation_id: Provider-assigned conversation id
            rubric: Stage rubric naming the correlation columns

        Returns:
            1-based row number, or None when absent

        Raises:
            googleapiclient.errors.HttpError: If the column cannot be read
        """
        if not conversation_id:
            return None

        column = await self.record_store.read_column(
            self.spreadsheet_id, rubric.correlation_column_range()
        )

        needle = conversation_id.strip()
        for index, value in enumerate(column):
            if value.strip() == needle:
                row = index + 1
                logger.info("conversation_row_resolved", conversation_id=conversation_id, row=row)
                return row

        logger.warning(
            "conversation_row_not_found",
            conversation_id=conversation_id,
            rows_scanned=len(column),
        )
        return None
