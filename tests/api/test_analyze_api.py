from unittest.mock import AsyncMock, patch

from fastapi.testclient import TestClient

from schemas.analysis import QuickAnalysisResult


def test_quick_analysis(client: TestClient) -> None:
    with patch(
        "api.v1.analyze.run_quick_analysis",
        new=AsyncMock(return_value=QuickAnalysisResult(result="结构清晰")),
    ) as mocked:
        response = client.post("/api/v1/analyze", json={"resume": "简历正文"})

    assert response.status_code == 200
    assert response.json()["data"] == {"result": "结构清晰"}
    mocked.assert_awaited_once_with("简历正文")


def test_unknown_fields_are_rejected(client: TestClient) -> None:
    response = client.post("/api/v1/analyze", json={"resume": "x", "extra": 1})

    assert response.status_code == 422
