"""Result assemblers.

The local entries are the primary output of a join (written in place).
The assembler decides what join_data() returns on top of that.
"""

from collections.abc import Sequence
from typing import Any

from joindata.contracts.results import JoinDataDetailedResult, JoinDataResult


class ResultAssembler:
    """Default assembler: summary only, the local list is not returned."""

    name = "default"
    kind = "result_assembler"

    def generate_result(self, join_failed_values: Sequence[Any], local_overwrite: list[Any], metadata: Any) -> JoinDataResult:
        return JoinDataResult.from_failures(list(join_failed_values))


class DetailedResultAssembler(ResultAssembler):
    """Summary plus the written local entries."""

    name = "detailed"

    def generate_result(
        self, join_failed_values: Sequence[Any], local_overwrite: list[Any], metadata: Any
    ) -> JoinDataDetailedResult:
        failed = list(join_failed_values)
        return JoinDataDetailedResult(all_success=not failed, join_failed_values=failed, local=local_overwrite)
