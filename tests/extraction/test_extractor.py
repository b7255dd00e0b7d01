"""Tests for structured-text extraction of job descriptions."""

import json

import pytest

from schemas.jd import ParsedJD
from services.extraction import (
    JD_SCHEMA,
    FieldKind,
    FieldSpec,
    StructuredTextExtractor,
    extract_jd,
    is_json_only,
)
from services.extraction.extractor import split_items
from services.extraction.schema import DEFAULT_TAG


JD_TEXT = (
    "岗位名称：后端开发工程师\n"
    "公司：字节跳动\n"
    "地点：北京\n"
    "薪资：25k-40k\n"
    "\n"
    "岗位职责：\n"
    "1. 负责后端服务的设计与开发\n"
    "2. 参与系统架构优化工作\n"
    "\n"
    "任职要求：\n"
    "- 熟悉Python和Go语言开发\n"
    "- 三年以上工作经验优先"
)


def test_scalar_fields_follow_their_labels():
    result = extract_jd("公司：字节跳动\n地点：北京")

    assert result.company == "字节跳动"
    assert result.location == "北京"


def test_missing_fields_take_documented_defaults():
    result = extract_jd("这是一段没有任何标签的文字")

    assert result == ParsedJD(
        title="未知岗位",
        company="未知公司",
        location="未知",
        salary="面议",
        experience="不限",
        education="不限",
        responsibilities=[],
        requirements=[],
        tags=[DEFAULT_TAG],
        benefits=[],
    )


def test_full_text_answer():
    result = extract_jd(JD_TEXT)

    assert result.title == "后端开发工程师"
    assert result.salary == "25k-40k"
    assert result.responsibilities == ["负责后端服务的设计与开发", "参与系统架构优化工作"]
    assert result.requirements == ["熟悉Python和Go语言开发", "三年以上工作经验优先"]
    assert result.tags == ["Python", "Go"]


def test_ascii_colon_and_english_labels_are_accepted():
    result = extract_jd("Company: ByteDance\nlocation:Shanghai")

    assert result.company == "ByteDance"
    assert result.location == "Shanghai"


def test_windows_line_endings_do_not_leak_into_values():
    result = extract_jd("公司：字节跳动\r\n地点：北京\r\n")

    assert result.company == "字节跳动"
    assert result.location == "北京"


def test_short_list_items_are_dropped():
    result = extract_jd("职责：\n- 写码\n- 负责核心模块开发工作")

    assert result.responsibilities == ["负责核心模块开发工作"]


def test_five_character_items_are_kept():
    result = extract_jd("任职要求：\n1. 熟悉SQL\n2. 团队协作好\n3. 有大型系统设计经验")

    assert result.requirements == ["熟悉SQL", "团队协作好", "有大型系统设计经验"]


def test_four_character_items_are_dropped():
    assert split_items("- 沟通良好\n- 逻辑思维清晰") == ["逻辑思维清晰"]


def test_scalar_value_on_the_next_line():
    result = extract_jd("公司：\n字节跳动\n地点：北京")

    assert result.company == "字节跳动"
    assert result.location == "北京"


def test_tags_also_consider_the_source_text():
    result = extract_jd("公司：字节跳动", source_text="需要熟悉 Kubernetes 与 Kafka")

    assert result.tags == ["Kafka", "Kubernetes"]


def test_json_answer_is_used_directly():
    answer = json.dumps(
        {
            "title": "数据分析师",
            "公司": "美团",
            "salary": 30000,
            "responsibilities": ["负责经营数据分析", ""],
            "requirements": "1. 熟练使用SQL查询\n2. 具备统计学基础知识",
            "tags": "SQL、统计",
        },
        ensure_ascii=False,
    )

    result = extract_jd(answer)

    assert result.title == "数据分析师"
    assert result.company == "美团"
    assert result.salary == "30000"
    assert result.location == "未知"
    assert result.responsibilities == ["负责经营数据分析"]
    assert result.requirements == ["熟练使用SQL查询", "具备统计学基础知识"]
    assert result.tags == ["SQL", "统计"]


def test_json_keys_match_case_insensitively():
    result = extract_jd('{"Title": "SRE", "LOCATION": "深圳"}')

    assert result.title == "SRE"
    assert result.location == "深圳"


def test_json_without_tags_runs_the_classifier():
    result = extract_jd('{"title": "运维"}', source_text="熟悉 Docker")

    assert result.tags == ["Docker"]


def test_json_of_unexpected_shape_falls_back_to_text():
    result = extract_jd('{"score": 85, "comment": "Python"}')

    assert result.title == "未知岗位"
    assert result.company == "未知公司"
    assert result.tags == ["Python"]


def test_extraction_is_deterministic():
    extractor = StructuredTextExtractor()

    assert extractor.extract(JD_TEXT) == extractor.extract(JD_TEXT)


def test_extracting_a_serialized_record_reproduces_it():
    record = extract_jd(JD_TEXT).model_dump()

    assert StructuredTextExtractor().extract(json.dumps(record)) == record


def test_default_lists_are_not_shared_between_results():
    extractor = StructuredTextExtractor()
    first = extractor.extract("")
    first["tags"].append("mutated")

    assert extractor.extract("")["tags"] == [DEFAULT_TAG]


def test_custom_schema():
    schema = (
        FieldSpec("school", ("学校",), default="未知"),
        FieldSpec("awards", ("获奖",), kind=FieldKind.LIST, default=()),
    )
    extractor = StructuredTextExtractor(schema)

    result = extractor.extract("学校：清华大学\n获奖：\n• 全国数学建模一等奖")

    assert result == {"school": "清华大学", "awards": ["全国数学建模一等奖"]}


def test_jd_schema_names_match_the_record():
    assert [spec.name for spec in JD_SCHEMA] == list(ParsedJD.model_fields)


def test_split_items_handles_numbering_and_bullets():
    block = "1. 负责推荐系统研发\n• 参与模型上线工作\n2.5年以上经验要求"

    assert split_items(block) == ["负责推荐系统研发", "参与模型上线工作", "2.5年以上经验要求"]


@pytest.mark.parametrize(
    "text",
    [
        None,
        "",
        "   \n",
        '{"total_score": 85}',
        '  {"a": {"b": [1, 2]}}  ',
        '```json\n{"total_score": 85}\n```',
    ],
)
def test_structured_output_is_json_only(text):
    assert is_json_only(text)


@pytest.mark.parametrize(
    "text",
    [
        "候选人整体匹配度较高",
        "{not json}",
        '结论如下：{"total_score": 85}',
        '```json\n{"a": 1}\n```\n以上是评分明细，下面是详细的文字分析内容',
    ],
)
def test_readable_report_is_not_json_only(text):
    assert not is_json_only(text)
