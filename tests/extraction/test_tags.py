from services.extraction import TagClassifier


def test_tags_come_back_in_vocabulary_order():
    classifier = TagClassifier()

    tags = classifier.classify("熟悉 Docker、Redis，掌握 Python 或 Java")

    assert tags == ["Java", "Python", "Redis", "Docker"]


def test_matching_is_case_sensitive_substring():
    classifier = TagClassifier(["Python", "AWS"])

    assert classifier.classify("python aws") == []
    assert classifier.classify("CPython on AWS Lambda") == ["Python", "AWS"]


def test_no_match_and_empty_text_give_empty_list():
    classifier = TagClassifier()

    assert classifier.classify("") == []
    assert classifier.classify("负责市场推广") == []


def test_duplicate_vocabulary_entries_are_reported_once():
    classifier = TagClassifier(["Go", "Go", "Vue"])

    assert classifier.classify("Go 和 Vue") == ["Go", "Vue"]
