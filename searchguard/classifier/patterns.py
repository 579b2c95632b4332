from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Optional, Pattern, Tuple

# Bump whenever a rule is added, removed, reordered or its regex changes.
PATTERN_TABLE_VERSION = "2"


@dataclass(frozen=True)
class PatternRule:
    rule_id: str
    regex: Pattern[str]

    def search(self, text: str) -> bool:
        return self.regex.search(text) is not None


def _rule(rule_id: str, pattern: str) -> PatternRule:
    return PatternRule(rule_id, re.compile(pattern, re.IGNORECASE))


# ----------------------------- XSS deny-list ---------------------------------

XSS_PATTERNS: Tuple[PatternRule, ...] = (
    _rule("script_tag", r"<\s*script"),
    _rule("javascript_uri", r"javascript:"),
    _rule("event_handler", r"on\w+\s*="),
    _rule("iframe_tag", r"<iframe"),
    _rule("object_tag", r"<object"),
    _rule("embed_tag", r"<embed"),
    _rule("link_tag", r"<link"),
    _rule("meta_tag", r"<meta"),
    _rule("style_tag", r"<style"),
    _rule("vbscript_uri", r"vbscript:"),
    _rule("data_html_uri", r"data:text/html"),
    _rule("css_expression", r"expression\s*\("),
    _rule("img_src", r"<img[^>]+src[^>]*="),
    _rule("alert_call", r"alert\s*\("),
    _rule("confirm_call", r"confirm\s*\("),
    _rule("prompt_call", r"prompt\s*\("),
    _rule("document_access", r"document\."),
    _rule("window_access", r"window\."),
    _rule("eval_call", r"eval\s*\("),
    _rule("set_timeout_call", r"setTimeout\s*\("),
    _rule("set_interval_call", r"setInterval\s*\("),
)

# ------------------------- SQL injection deny-list ---------------------------

SQL_INJECTION_PATTERNS: Tuple[PatternRule, ...] = (
    _rule(
        "sql_keyword",
        r"\b(SELECT|INSERT|UPDATE|DELETE|DROP|CREATE|ALTER|EXEC|EXECUTE|UNION|DECLARE)\b",
    ),
    _rule("sql_metachar", r"'|\\|;|--|/\*|\*/"),
    _rule("numeric_tautology", r"(OR|AND)\s+['\"]*\d+['\"]*\s*=\s*['\"]*\d+['\"]*"),
    _rule("word_tautology", r"\s+(OR|AND)\s+['\"]*[a-zA-Z]+['\"]*\s*=\s*['\"]*[a-zA-Z]+['\"]*"),
    _rule("one_equals_one", r"1\s*=\s*1"),
    _rule("single_quoted_or", r"'.*OR.*'"),
    _rule("double_quoted_or", r"\".*OR.*\""),
    _rule("union_select", r"\bUNION\s+(ALL\s+)?SELECT\b"),
    _rule("insert_into", r"\bINSERT\s+INTO\b"),
    _rule("drop_table", r"\bDROP\s+TABLE\b"),
    _rule("truncate_table", r"\bTRUNCATE\s+TABLE\b"),
    _rule("exec_call", r"\bEXEC\s*\("),
    _rule("xp_cmdshell", r"\bxp_cmdshell\b"),
    _rule("sp_executesql", r"\bsp_executesql\b"),
)

# ------------------------------ allow-list -----------------------------------

# Letters, digits, whitespace and . , ! ? ' " ( ) -
ALLOWED_CHARSET: Pattern[str] = re.compile(r"[a-zA-Z0-9\s.,!?'\"()-]+")


def first_match(rules: Iterable[PatternRule], text: str) -> Optional[PatternRule]:
    for rule in rules:
        if rule.search(text):
            return rule
    return None


__all__ = [
    "ALLOWED_CHARSET",
    "PATTERN_TABLE_VERSION",
    "PatternRule",
    "SQL_INJECTION_PATTERNS",
    "XSS_PATTERNS",
    "first_match",
]
