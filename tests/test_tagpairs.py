import logging
import threading

import pytest
from tagcrypt_core.errors import NoMatchingTagsError
from tagcrypt_core.tagpairs import TagPair, TagPairs


def test_with_all_random_tags_matches_subset(pairs):
    matches = pairs.with_all_random_tags(["r1", "r2", "r3"])
    assert sorted(matches.all_plain()) == ["home", "work"]
    assert len(matches) == 2


def test_with_all_random_tags_no_match(pairs):
    with pytest.raises(NoMatchingTagsError) as e:
        pairs.with_all_random_tags(["r9", "r8"])
    assert set(e.value.tokens) == {"r9", "r8"}

    with pytest.raises(NoMatchingTagsError):
        pairs.with_all_random_tags([])

    with pytest.raises(NoMatchingTagsError):
        TagPairs().with_all_random_tags(["r1"])


def test_duplicate_token_first_pair_wins():
    index = TagPairs([TagPair("work", "r1"), TagPair("job", "r1"), TagPair("home", "r2")])
    assert index.with_all_random_tags(["r1", "r2"]).all_plain() == ["work", "home"]
    assert index.with_random_tag("r1") == TagPair("work", "r1")


def test_duplicate_plain_kept_once(caplog):
    caplog.set_level(logging.DEBUG, logger="TagCrypt.TagPairs")
    index = TagPairs([TagPair("work", "r1"), TagPair("home", "r2"), TagPair("work", "r3")], debug=True)
    assert index.with_all_random_tags(["r3", "r1", "r2"]).all_plain() == ["work", "home"]
    assert "maps to more than one random tag" in caplog.text
    assert index.random_tags_for(["work"]) == ["r1"]


def test_with_random_tag_missing(pairs):
    with pytest.raises(NoMatchingTagsError):
        pairs.with_random_tag("nope")


def test_with_plain_tags(pairs):
    assert pairs.with_plain_tags(["home"]).all_random() == ["r2"]
    with pytest.raises(NoMatchingTagsError) as e:
        pairs.with_plain_tags(["garden"])
    assert e.value.plain_tags == ["garden"]


def test_random_tags_for_keeps_caller_order(pairs):
    assert pairs.random_tags_for(["home", "work"]) == ["r2", "r1"]
    with pytest.raises(NoMatchingTagsError) as e:
        pairs.random_tags_for(["work", "garden"])
    assert e.value.plain_tags == ["garden"]


def test_projections_and_serialization(pairs):
    assert pairs.all_plain() == ["work", "home"]
    assert pairs.all_random() == ["r1", "r2"]
    assert TagPair("work", "r1") in pairs

    data = pairs.to_list()
    assert data == [{"plain": "work", "random": "r1"}, {"plain": "home", "random": "r2"}]
    assert list(TagPairs.from_list(data)) == list(pairs)


def test_concurrent_reads_during_add():
    index = TagPairs([TagPair(f"p{i}", f"r{i}") for i in range(100)])
    errors = []

    def reader():
        try:
            for _ in range(200):
                assert len(index.with_all_random_tags(["r0", "r50"])) == 2
        except Exception as e:  # collected for the main thread
            errors.append(e)

    def writer():
        for i in range(100, 200):
            index.add(TagPair(f"p{i}", f"r{i}"))

    threads = [threading.Thread(target=reader) for _ in range(4)] + [threading.Thread(target=writer)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    assert len(index) == 200
