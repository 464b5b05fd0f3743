import pytest

from exam_builder.navigation import CarrierRegistry, NavigationCarrier, page_to_route, sidebar_key
from exam_builder.navigation.routes import BASE

TESTS = f"{BASE}/tests"
CREATE = f"{BASE}/tests/create"


@pytest.fixture
def nav():
    return NavigationCarrier(max_depth=20)


class TestCarrier:
    def test_context_survives_round_trip(self, nav):
        assert nav.navigate(TESTS, "test-form", {"filter": "active"}) == CREATE
        result = nav.back(CREATE)
        assert result.restored
        assert result.path == TESTS
        assert result.context == {"filter": "active"}
        assert nav.depth == 0

    def test_missing_frame_gives_empty_context(self, nav):
        result = nav.back(CREATE)
        assert not result.restored
        assert result.path is None
        assert result.context == {}

    def test_context_is_copied(self, nav):
        context = {"filter": {"status": "draft"}}
        nav.navigate(TESTS, CREATE, context)
        context["filter"]["status"] = "published"
        assert nav.back(CREATE).context == {"filter": {"status": "draft"}}

    def test_back_drops_newer_frames(self, nav):
        nav.navigate(TESTS, f"{BASE}/tests/t1", {"page": 2})
        nav.navigate(f"{BASE}/tests/t1", f"{BASE}/readings/create?testId=t1")
        nav.navigate(f"{BASE}/readings/create?testId=t1", f"{BASE}/readings")

        result = nav.back(f"{BASE}/tests/t1")
        assert result.context == {"page": 2}
        assert nav.depth == 0

    def test_oldest_frames_evicted_past_depth(self, nav):
        for i in range(25):
            nav.navigate(f"/from/{i}", f"/to/{i}", {"i": i})
        assert nav.depth == 20
        assert nav.back("/to/3").restored is False
        assert nav.back("/to/5").context == {"i": 5}

    def test_peek_and_clear(self, nav):
        assert nav.peek() is None
        nav.navigate(TESTS, CREATE, {"tab": "reading"})
        assert nav.peek().to_path == CREATE
        nav.clear()
        assert nav.peek() is None


class TestScreenTokens:
    def test_late_response_is_dropped(self, nav):
        token = nav.screen_token()
        nav.navigate(TESTS, CREATE)
        applied = []
        assert nav.apply_if_current(token, lambda: applied.append("stale")) is False
        assert applied == []

    def test_current_response_is_applied(self, nav):
        nav.navigate(TESTS, CREATE)
        token = nav.screen_token()
        applied = []
        assert nav.apply_if_current(token, lambda: applied.append("fresh")) is True
        assert applied == ["fresh"]

    def test_back_moves_to_a_new_screen(self, nav):
        nav.navigate(TESTS, CREATE)
        token = nav.screen_token()
        nav.back(CREATE)
        assert not nav.is_current(token)


def test_registry_keeps_one_carrier_per_session():
    registry = CarrierRegistry(max_depth=5)
    first = registry.for_session("a@example.com")
    assert registry.for_session("a@example.com") is first
    assert registry.for_session("b@example.com") is not first
    assert first.max_depth == 5
    registry.discard("a@example.com")
    assert registry.for_session("a@example.com") is not first


@pytest.mark.parametrize("page_id, data, expected", [
    ("tests", None, f"{BASE}/tests"),
    ("test-form", None, f"{BASE}/tests/create"),
    ("test-form", {"editId": "t1"}, f"{BASE}/tests/t1/edit"),
    ("test-detail", {"testId": "t1"}, f"{BASE}/tests/t1"),
    ("reading-form", {"testId": "t1"}, f"{BASE}/readings/create?testId=t1"),
    ("listening-part-form", {"listeningId": "l1"}, f"{BASE}/listening-parts/create?listeningId=l1"),
    ("writing-task-form", {"editId": "w1"}, f"{BASE}/writing-tasks/w1/edit"),
    ("reading-part-questions", {"partId": "p1"}, f"{BASE}/reading-parts/p1/questions"),
    ("no-such-page", None, f"{BASE}/tests"),
])
def test_page_to_route(page_id, data, expected):
    assert page_to_route(page_id, data) == expected


@pytest.mark.parametrize("pathname, key", [
    (f"{BASE}/writing-tasks/create", "writing-tasks"),
    (f"{BASE}/writings", "writings"),
    (f"{BASE}/listening-parts/p1/questions", "listening-parts"),
    (f"{BASE}/readings/create?testId=t1", "readings"),
    (f"{BASE}/tests/t1", "tests"),
    ("/elsewhere", "tests"),
])
def test_sidebar_key(pathname, key):
    assert sidebar_key(pathname) == key
