from aiobotocore.session import get_session

from sql_review.domain import MergedReport
from sql_review.output.serialization import report_to_json


class SqsReportOutput:
    def __init__(self, queue_url: str, region: str = "us-east-1") -> None:
        self._queue_url = queue_url
        self._region = region
        self._session = get_session()

    @property
    def name(self) -> str:
        return "sqs"

    async def send(self, report: MergedReport) -> None:
        async with self._session.create_client("sqs", region_name=self._region) as client:
            await client.send_message(
                QueueUrl=self._queue_url,
                MessageBody=report_to_json(report),
            )
