"""
In-memory collaborators for use case and API tests.
"""

from uuid import UUID, uuid4

from src.application.use_cases import ContourPersistenceError


SAMPLES = [
    {"x": 0, "y": 0, "depth": -1},
    {"x": 10, "y": 0, "depth": -2},
    {"x": 5, "y": 10, "depth": -3},
]

HOMOGENEOUS_SAMPLES = [
    {"x": 106.80, "y": -6.20, "depth": -4.2},
    {"x": 106.81, "y": -6.20, "depth": -4.2},
    {"x": 106.81, "y": -6.21, "depth": -4.2},
]


class InMemorySampleSource:
    def __init__(self, samples_by_survey: dict[str, list[dict]]):
        self.samples_by_survey = samples_by_survey

    async def fetch_samples(self, survey_id: str, user_id: str) -> list[dict]:
        return list(self.samples_by_survey.get(survey_id, []))


class InMemoryContourRepository:
    def __init__(self, existing: int = 0, failing_depths: tuple[float, ...] = ()):
        self.existing = existing
        self.failing_depths = failing_depths
        self.inserted: list[dict] = []
        self.calls: list[str] = []

    async def delete_for_survey(self, survey_id: str, user_id: str) -> int:
        self.calls.append("delete")
        deleted, self.existing = self.existing, 0
        return deleted

    async def insert_contour_line(self, geometry, depth, metadata, survey_id, user_id) -> UUID:
        self.calls.append("insert")
        if depth in self.failing_depths:
            raise ContourPersistenceError(depth, RuntimeError("constraint violated"))
        self.inserted.append(
            {"geometry": geometry, "depth": depth, "metadata": metadata, "survey_id": survey_id}
        )
        return uuid4()
