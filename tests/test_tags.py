import pytest
from tagcrypt_core.tags import Tag, TagKind, parse_tags, render_tags


@pytest.mark.parametrize("text,kind,value", [
    ("id:1234", TagKind.ID, "1234"),
    ("created:20150224030201", TagKind.CREATED, "20150224030201"),
    ("all", TagKind.ALL, ""),
    ("work", TagKind.PLAIN, "work"),
    ("type:note", TagKind.PLAIN, "type:note"),
    ("allowed", TagKind.PLAIN, "allowed"),
])
def test_parse(text, kind, value):
    tag = Tag.parse(text)
    assert tag.kind is kind
    assert tag.value == value
    assert str(tag) == text


def test_render_literals():
    tags = [Tag.id("x"), Tag.plain("work"), Tag.created("1"), Tag.all()]
    assert render_tags(tags) == ["id:x", "work", "created:1", "all"]
    assert parse_tags(render_tags(tags)) == tags
