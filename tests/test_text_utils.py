from app.utils.text_utils import merge_tags, sanitize_filename, strip_tags, to_list, unique


def test_strip_tags_removes_markup_and_whitespace():
    assert strip_tags("  <b>Senior</b> Engineer <br/> ") == "Senior Engineer"
    assert strip_tags(None) == ""
    assert strip_tags(42) == "42"


def test_unique_keeps_first_seen_order():
    assert unique(["b", "a", "b", "", "c", "a"]) == ["b", "a", "c"]


def test_to_list_accepts_lists_and_textarea_strings():
    assert to_list(["  Python ", "<i>SQL</i>", "", "Python"]) == ["Python", "SQL"]
    assert to_list("Health insurance\n\n Flexible hours \nHealth insurance") == [
        "Health insurance",
        "Flexible hours",
    ]
    assert to_list(None) == []
    assert to_list(7) == []


def test_merge_tags_puts_tags_before_required_skills():
    assert merge_tags(["Backend", "Python"], ["Python", "MongoDB"]) == ["Backend", "Python", "MongoDB"]
    assert merge_tags(None, "React\nNode") == ["React", "Node"]


def test_sanitize_filename():
    assert sanitize_filename("My Resume (final).pdf") == "My_Resume_final.pdf"
    assert sanitize_filename("../../etc/passwd") == "passwd"
    assert sanitize_filename("C:\\Users\\me\\cv v2.docx") == "cv_v2.docx"
