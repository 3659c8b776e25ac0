import pytest
import requests

from apps.domains.attempts.content import fetcher as fetcher_module
from apps.domains.attempts.content.fetcher import ContentFetcher, convert_github_url_to_raw


class FakeResponse:
    def __init__(self, text="", status_code=200, payload=None):
        self.text = text
        self.status_code = status_code
        self._payload = payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return self._payload


class FakeWeb:
    """Routes requests.get through a url -> FakeResponse table."""

    def __init__(self):
        self.routes = {}
        self.seen = []

    def __setitem__(self, url, response):
        self.routes[url] = response

    def get(self, url, timeout=None):
        self.seen.append(url)
        if url not in self.routes:
            raise requests.ConnectionError(f"no route to {url}")
        return self.routes[url]


@pytest.fixture
def web(monkeypatch):
    fake = FakeWeb()
    monkeypatch.setattr(fetcher_module.requests, "get", fake.get)
    return fake


def test_convert_github_url_to_raw():
    assert (
        convert_github_url_to_raw("https://github.com/ada/engine/blob/main/src/app.py")
        == "https://raw.githubusercontent.com/ada/engine/main/src/app.py"
    )
    assert convert_github_url_to_raw("https://example.com/ada") is None


def test_blob_link_reads_raw_file(web):
    web["https://raw.githubusercontent.com/ada/engine/main/app.py"] = FakeResponse("print('hi')")

    got = ContentFetcher().fetch("https://github.com/ada/engine/blob/main/app.py")

    assert got.is_functional
    assert got.body == "print('hi')"


def test_html_page_is_reduced_to_visible_text(web):
    web["https://example.com/post"] = FakeResponse(
        "<html><head><style>p{}</style></head>"
        "<body><script>alert(1)</script><h1>Title</h1>\n\n<p>Some   body</p></body></html>"
    )

    got = ContentFetcher().fetch("https://example.com/post")

    assert got.is_functional
    assert got.body == "Title Some body"


def test_body_is_truncated(web):
    web["https://example.com/long"] = FakeResponse("<body>" + "a" * 50 + "</body>")

    got = ContentFetcher(max_content_size=10).fetch("https://example.com/long")

    assert got.body == "a" * 10


def test_repository_readme_falls_back_to_master(web):
    web["https://raw.githubusercontent.com/ada/engine/main/README.md"] = FakeResponse(status_code=404)
    web["https://raw.githubusercontent.com/ada/engine/master/README.md"] = FakeResponse("# Engine")

    got = ContentFetcher().fetch("https://github.com/ada/engine")

    assert got.body == "# Engine"
    assert web.seen[:2] == [
        "https://raw.githubusercontent.com/ada/engine/main/README.md",
        "https://raw.githubusercontent.com/ada/engine/master/README.md",
    ]


def test_repository_api_summary(web):
    web["https://api.github.com/repos/ada/engine"] = FakeResponse(
        payload={
            "full_name": "ada/engine",
            "description": None,
            "stargazers_count": 3,
            "forks_count": 1,
            "language": "Python",
            "updated_at": "2024-01-01",
        }
    )

    got = ContentFetcher().fetch("https://github.com/ada/engine/")

    assert got.is_functional
    assert "Repository: ada/engine" in got.body
    assert "Description: No description" in got.body


def test_unreachable_url_is_not_functional(web):
    got = ContentFetcher().fetch("https://nowhere.invalid/")

    assert got.is_functional is False
    assert got.body == ""
