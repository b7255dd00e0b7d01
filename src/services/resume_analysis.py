"""Resume-to-job match analysis over the streaming evaluation workflow.

The workflow has two LLM nodes: ``text`` carries the evaluation report and
``text_1`` the evaluator's commentary. Either may come back as bare JSON
(intermediate scoring data) instead of prose; such outputs are left out of
the readable report.
"""

from __future__ import annotations

import asyncio
import logging
import re
from contextlib import aclosing
from pathlib import PurePath
from typing import Any

from core.config import get_settings
from core.exceptions import UnknownJobSelectionError, UnsupportedDocumentError
from schemas.resume import ResumeReport, ScoreBreakdown
from services.extraction import is_json_only
from services.extraction.extractor import parse_json_object
from services.workflow import (
    AccumulationPolicy,
    ResultAggregator,
    Snapshot,
    StreamOutcome,
    WorkflowClient,
    collect_stream,
    document_input,
    new_user_id,
)


logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS: tuple[str, ...] = (
    ".txt",
    ".md",
    ".pdf",
    ".html",
    ".xlsx",
    ".xls",
    ".doc",
    ".docx",
    ".csv",
    ".pptx",
    ".ppt",
    ".xml",
    ".epub",
)

REPORT_SEPARATOR = "\n\n---\n\n"
EMPTY_REPORT = "分析完成，但未生成文本报告。"

_SCORE_PATTERNS = (
    re.compile(r"总体匹配度[：:]\s*(\d+\.?\d*)", re.IGNORECASE),
    re.compile(r"得分[：:]\s*(\d+\.?\d*)", re.IGNORECASE),
)

# Job selections configured on the evaluation workflow
JOB_OPTIONS: tuple[str, ...] = (
    "金融：银行金融科技类岗位",
    "金融：银行产品与研发类岗位",
    "金融：银行客户服务与销售岗",
    "金融：银行运营与支持岗",
    "金融：银行信贷与投资岗",
    "金融：银行风险管理岗",
    "金融：投行股权承做岗",
    "金融：机构销售岗",
    "金融：资管固收投资助理",
    "金融：研究助理岗",
    "金融：投资研究岗",
    "金融：产品研发岗",
    "金融：风险控制岗",
    "金融：量化交易员",
    "金融：基金运营岗",
    "金融：精算师",
    "金融：保险产品开发",
    "金融：核保核赔岗",
    "金融：保险投资岗",
    "快消：快消市场销售管培生",
    "快消：快消HR",
    "快消：快消产品供应链管培生",
    "快消：快消技术支持岗",
    "快消：快消品牌管理",
    "快消：快消产品研发",
    "快消：市场调研",
    "互联网：后端开发工程师",
    "互联网：前端开发工程师",
    "互联网：移动端开发工程师",
    "互联网：算法工程师",
    "互联网：测试开发工程师",
    "互联网：功能产品经理",
    "互联网：策略产品经理",
    "互联网：商业化产品经理",
    "互联网：AI产品经理",
    "互联网：UI设计师",
    "互联网：交互设计师",
    "互联网：数据科学家",
    "互联网：商业分析师",
    "互联网：电商运营",
    "互联网：内容运营",
    "互联网：产品运营",
    "互联网：市场营销",
    "互联网：用户研究",
    "互联网：投资分析师",
    "互联网：风险策略分析师",
    "互联网：人力资源",
    "互联网：行政专员",
    "互联网：战略分析师",
)


def validate_upload(filename: str | None, job_selection: str) -> None:
    """Reject files the workflow cannot read and unknown job selections."""
    suffix = PurePath(filename or "").suffix.lower()
    if suffix not in SUPPORTED_EXTENSIONS:
        raise UnsupportedDocumentError(
            f"Unsupported document type '{suffix or filename}'"
        )
    if job_selection not in JOB_OPTIONS:
        raise UnknownJobSelectionError(f"Unknown job selection '{job_selection}'")


def _to_float(value: Any) -> float | None:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def extract_scores(snapshot: Snapshot) -> tuple[float, ScoreBreakdown]:
    """Read the match score from JSON node output, else from the report text."""
    total = 0.0
    scores = ScoreBreakdown()

    candidate = snapshot.text or snapshot.evaluation
    data = parse_json_object(candidate) if candidate else None
    if data is not None:
        parsed_total = _to_float(data.get("total_score"))
        if parsed_total is not None:
            total = parsed_total
        raw_scores = data.get("scores")
        if isinstance(raw_scores, dict):
            numeric = {
                key: number
                for key in ScoreBreakdown.model_fields
                if (number := _to_float(raw_scores.get(key))) is not None
            }
            scores = ScoreBreakdown(**numeric)
        return total, scores

    combined = snapshot.text + snapshot.evaluation
    for pattern in _SCORE_PATTERNS:
        match = pattern.search(combined)
        if match:
            total = float(match.group(1))
            break
    return total, scores


def compose_report(snapshot: Snapshot) -> str:
    """Join the readable outputs, leaving out bare JSON intermediates."""
    parts = (snapshot.text, snapshot.evaluation)
    readable = [part for part in parts if not is_json_only(part)]
    if readable:
        return REPORT_SEPARATOR.join(readable)

    # Every output was bare JSON; show it raw rather than nothing
    return REPORT_SEPARATOR.join(part.strip() for part in parts if part.strip())


def build_report(outcome: StreamOutcome) -> ResumeReport:
    total, scores = extract_scores(outcome.snapshot)
    report = compose_report(outcome.snapshot)
    status = outcome.status
    if not report:
        report = EMPTY_REPORT
        if status == "complete":
            status = "empty"
    return ResumeReport(report=report, total_score=total, scores=scores, status=status)


async def analyze_resume(
    *,
    filename: str,
    content: bytes,
    content_type: str | None,
    job_selection: str,
    client: WorkflowClient | None = None,
) -> ResumeReport:
    """Upload the resume, run the evaluation workflow and build the report."""
    validate_upload(filename, job_selection)
    settings = get_settings()
    if client is None:
        client = WorkflowClient.for_app(settings.DIFY_RESUME_API_KEY, "resume analysis")

    user = new_user_id()
    file_id = await client.upload_file(filename, content, content_type, user)
    logger.info("Uploaded resume (%d bytes) as file %s", len(content), file_id)
    if settings.UPLOAD_SETTLE_SECONDS > 0:
        await asyncio.sleep(settings.UPLOAD_SETTLE_SECONDS)

    inputs = {"CV": document_input(file_id), "job_selection": job_selection}
    aggregator = ResultAggregator(AccumulationPolicy.APPEND)
    async with aclosing(client.stream_workflow(inputs, user)) as chunks:
        outcome = await collect_stream(chunks, aggregator)
    logger.info(
        "Resume analysis finished: status=%s events=%d",
        outcome.status,
        outcome.events,
    )
    return build_report(outcome)
