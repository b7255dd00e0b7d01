from unittest.mock import AsyncMock, patch

from fastapi.testclient import TestClient

from schemas.resume import ResumeReport


JOB = "金融：量化交易员"


def test_job_options(client: TestClient) -> None:
    response = client.get("/api/v1/resume/job-options")

    assert response.status_code == 200
    options = response.json()["data"]["options"]
    assert len(options) == 49
    assert JOB in options


def test_analyze_uploaded_resume(client: TestClient) -> None:
    report = ResumeReport(report="匹配度较高", total_score=80)
    with patch(
        "api.v1.resume.analyze_resume", new=AsyncMock(return_value=report)
    ) as mocked:
        response = client.post(
            "/api/v1/resume/analyze",
            files={"file": ("cv.pdf", b"%PDF-1.4", "application/pdf")},
            data={"job_selection": JOB},
        )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["report"] == "匹配度较高"
    assert data["total_score"] == 80
    assert data["status"] == "complete"
    kwargs = mocked.await_args.kwargs
    assert kwargs["filename"] == "cv.pdf"
    assert kwargs["content"] == b"%PDF-1.4"
    assert kwargs["content_type"] == "application/pdf"
    assert kwargs["job_selection"] == JOB


def test_unsupported_file_type_is_rejected(client: TestClient) -> None:
    response = client.post(
        "/api/v1/resume/analyze",
        files={"file": ("cv.exe", b"MZ", "application/octet-stream")},
        data={"job_selection": JOB},
    )

    assert response.status_code == 422
    body = response.json()
    assert body["error"]["type"] == "domain_error"
    assert ".exe" in body["message"]


def test_unknown_job_selection_is_rejected(client: TestClient) -> None:
    response = client.post(
        "/api/v1/resume/analyze",
        files={"file": ("cv.pdf", b"%PDF", "application/pdf")},
        data={"job_selection": "不存在的岗位"},
    )

    assert response.status_code == 422
    assert response.json()["error"]["type"] == "domain_error"


def test_missing_file_is_a_validation_error(client: TestClient) -> None:
    response = client.post("/api/v1/resume/analyze", data={"job_selection": JOB})

    assert response.status_code == 422
    assert response.json()["error"]["type"] == "validation_error"
