"""Builder page ids and their paths."""
from typing import Dict, Optional
from urllib.parse import urlencode

BASE = "/ielts-test-builder"

PAGE_IDS = (
    "tests",
    "test-form",
    "test-detail",
    "readings",
    "reading-form",
    "reading-parts",
    "reading-part-form",
    "listenings",
    "listening-form",
    "listening-parts",
    "listening-part-form",
    "writings",
    "writing-form",
    "writing-tasks",
    "writing-task-form",
    "reading-part-questions",
    "listening-part-questions",
)

# list pages whose path is just BASE/<page>
LIST_PAGES = {"tests", "readings", "reading-parts", "listenings", "listening-parts", "writings", "writing-tasks"}

# create forms: page id -> (collection, prefill query parameter)
CREATE_FORMS = {
    "reading-form": ("readings", "testId"),
    "listening-form": ("listenings", "testId"),
    "writing-form": ("writings", "testId"),
    "reading-part-form": ("reading-parts", "readingId"),
    "listening-part-form": ("listening-parts", "listeningId"),
    "writing-task-form": ("writing-tasks", "writingId"),
}

# Longest prefix first: "/writing-tasks" must win over "/writings"
SIDEBAR_PREFIXES = (
    ("/writing-tasks", "writing-tasks"),
    ("/writings", "writings"),
    ("/listening-parts", "listening-parts"),
    ("/listenings", "listenings"),
    ("/reading-parts", "reading-parts"),
    ("/readings", "readings"),
)


def page_to_route(page_id: str, data: Optional[Dict[str, str]] = None) -> str:
    data = data or {}

    if page_id in LIST_PAGES:
        return f"{BASE}/{page_id}"

    if page_id == "test-form":
        if data.get("editId"):
            return f"{BASE}/tests/{data['editId']}/edit"
        return f"{BASE}/tests/create"

    if page_id == "test-detail":
        return f"{BASE}/tests/{data.get('testId')}"

    if page_id in CREATE_FORMS:
        collection, prefill = CREATE_FORMS[page_id]
        # Section forms only ever create
        if data.get("editId") and prefill != "testId":
            return f"{BASE}/{collection}/{data['editId']}/edit"
        query = f"?{urlencode({prefill: data[prefill]})}" if data.get(prefill) else ""
        return f"{BASE}/{collection}/create{query}"

    if page_id == "reading-part-questions":
        return f"{BASE}/reading-parts/{data.get('partId')}/questions"

    if page_id == "listening-part-questions":
        return f"{BASE}/listening-parts/{data.get('partId')}/questions"

    return f"{BASE}/tests"


def sidebar_key(pathname: str) -> str:
    relative = pathname[len(BASE):] if pathname.startswith(BASE) else pathname
    for prefix, key in SIDEBAR_PREFIXES:
        if relative.startswith(prefix):
            return key
    return "tests"
