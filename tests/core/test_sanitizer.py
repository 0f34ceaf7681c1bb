"""Tests for the read-only SQL sanitizer."""

from __future__ import annotations

import pytest

from src.core.sanitizer import inspect_query, sanitize_sql


def test_strips_trailing_semicolon_and_whitespace() -> None:
    assert sanitize_sql("SELECT * FROM t; ") == "SELECT * FROM t"


def test_collapses_newlines_and_spaces() -> None:
    sql = "  SELECT a,\n       b\n  FROM   t\n WHERE a = :year;\n"

    assert sanitize_sql(sql) == "SELECT a, b FROM t WHERE a = :year"


@pytest.mark.parametrize("value", [None, "", "   \n  "])
def test_absent_query_is_not_an_error(value: str | None) -> None:
    assert sanitize_sql(value) is None
    assert inspect_query(value).status == "absent"


@pytest.mark.parametrize(
    "sql",
    [
        "update t set x=1",
        "SELECT 1; DROP TABLE users",
        "select * from t; Delete from t",
        "WITH x AS (SELECT 1) INSERT INTO t SELECT * FROM x",
        "exec sp_who",
        "SELECT 1; grant all on t to public",
    ],
)
def test_rejects_denylisted_keywords(sql: str) -> None:
    assert sanitize_sql(sql) is None
    assert inspect_query(sql).status == "rejected"


@pytest.mark.parametrize(
    "sql",
    [
        "SELECT * FROM t -- trailing note",
        "SELECT /* hidden */ 1",
        "SELECT 1 */",
    ],
)
def test_rejects_comment_markers(sql: str) -> None:
    check = inspect_query(sql)

    assert check.status == "rejected"
    assert check.sql is None
    assert "comment" in (check.reason or "")


def test_commented_out_drop_is_rejected() -> None:
    assert sanitize_sql("SELECT * FROM t -- drop it") is None


def test_keyword_match_is_whole_word_only() -> None:
    sql = "SELECT updated_at, created_by, offset_value FROM settings_history"

    assert sanitize_sql(sql) == sql


def test_rejection_reason_names_keyword() -> None:
    check = inspect_query("select 1; truncate orders")

    assert check.reason == "forbidden keyword 'TRUNCATE'"
    assert check.is_executable is False


def test_only_one_trailing_semicolon_is_removed() -> None:
    assert sanitize_sql("SELECT 1;;") == "SELECT 1;"


def test_lone_semicolon_is_absent() -> None:
    assert inspect_query(" ; ").status == "absent"
