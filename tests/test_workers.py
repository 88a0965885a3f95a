import pytest

from imageflasher.workers import FeaturedProjectWorker, build_featured_project_url

from conftest import FakeSettings


def test_default_endpoint_gets_display_params():
    assert build_featured_project_url(None) == (
        "https://efp.balena.io/index.html?borderRight=false&darkBackground=true"
    )
    assert build_featured_project_url("") == build_featured_project_url(None)


def test_existing_query_is_kept():
    url = build_featured_project_url("https://example.com/efp?lang=en")
    assert url == "https://example.com/efp?lang=en&borderRight=false&darkBackground=true"


@pytest.mark.parametrize("endpoint", ["not a url", "/relative/path", 42, ["https://x"]])
def test_malformed_endpoint_raises(endpoint):
    with pytest.raises(ValueError):
        build_featured_project_url(endpoint)


def run_worker(settings):
    worker = FeaturedProjectWorker(settings)
    results = {"url": [], "error": []}
    worker.finished.connect(results["url"].append)
    worker.failed.connect(results["error"].append)
    worker.run()
    return results


def test_worker_emits_url():
    results = run_worker(FakeSettings({"featuredProjectEndpoint": "https://example.com/p"}))
    assert results["url"] == ["https://example.com/p?borderRight=false&darkBackground=true"]
    assert results["error"] == []


def test_worker_swallows_settings_failure():
    results = run_worker(FakeSettings(error=OSError("permission denied")))
    assert results["url"] == []
    assert results["error"] == ["permission denied"]
