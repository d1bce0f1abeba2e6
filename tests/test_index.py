from __future__ import annotations

import pytest

from scriptdoc.index import DocFormatError, DocIndex, build_index, dump_index, load_index


def test_build_index_collects_blocks(greet_script) -> None:
    index = build_index(greet_script)
    assert index.script == "greet"
    assert index.description == "\ngreet: say hello to people.\n"
    assert index.topics == ["fail", "hello"]
    assert index.get("fail") == "fail CODE"
    assert index.get("missing") == ""


def test_duplicate_block_rejected(tmp_path) -> None:
    f = tmp_path / "dup"
    f.write_text("# <doc:a>\n# </doc:a>\n# <doc:a>\n# </doc:a>\n")
    with pytest.raises(DocFormatError, match="more than once"):
        build_index(f)


def test_unterminated_block_rejected(tmp_path) -> None:
    f = tmp_path / "open"
    f.write_text("# <doc:a>\n# text\n")
    with pytest.raises(DocFormatError, match="never closed"):
        build_index(f)


def test_dump_and_load(tmp_path, greet_script) -> None:
    index = build_index(greet_script)
    out = tmp_path / "greet.docs.yaml"
    out.write_text(dump_index(index))
    assert load_index(out) == index


def test_load_rejects_non_mapping(tmp_path) -> None:
    f = tmp_path / "bad.yaml"
    f.write_text("- a\n- b\n")
    with pytest.raises(DocFormatError, match="mapping"):
        load_index(f)


def test_load_requires_script(tmp_path) -> None:
    f = tmp_path / "bad.yaml"
    f.write_text("blocks:\n  a: text\n")
    with pytest.raises(DocFormatError, match="script"):
        load_index(f)


def test_load_missing_file(tmp_path) -> None:
    with pytest.raises(DocFormatError, match="does not exist"):
        load_index(tmp_path / "nope.yaml")


def test_index_topics_exclude_script_name() -> None:
    index = DocIndex(script="s", blocks={"s": "top", "b": "", "a": ""})
    assert index.topics == ["a", "b"]
