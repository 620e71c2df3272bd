from fastapi.testclient import TestClient

from app.departments import DepartmentRegistry
from app.main import app, get_enhancer, get_registry

client = TestClient(app)

PAGE = '<a href="/documents/37101/0/529%C2%AA+RE.pdf/abc">x</a>'
OPTIONS = {"secretaria": "saude", "normalize_special_chars": True, "relativize_links": False}


class FakeEnhancer:
    def __init__(self, reply):
        self.reply = reply
        self.seen = []

    async def enhance(self, html, prompt):
        self.seen.append(html)
        return self.reply


def override(reply):
    fake = FakeEnhancer(reply)
    app.dependency_overrides[get_enhancer] = lambda: fake
    app.dependency_overrides[get_registry] = DepartmentRegistry
    return fake


def teardown_function():
    app.dependency_overrides.clear()


def test_normalize_endpoint():
    r = client.post("/normalize", json={"html": PAGE, "options": OPTIONS})
    assert r.status_code == 200

    data = r.json()
    assert data["processed_html"] == '<a href="/documents/d/saude/529-re-pdf">x</a>'
    assert data["urls_normalized"] == 1
    assert data["urls_processed"] == [
        {"original": "/documents/37101/0/529%C2%AA+RE.pdf/abc", "new": "/documents/d/saude/529-re-pdf"}
    ]
    assert "normalizeUrl-input" in data["debug_output"]


def test_normalize_requires_secretaria():
    r = client.post("/normalize", json={"html": PAGE, "options": {"secretaria": ""}})
    assert r.status_code == 422


def test_enhance_endpoint():
    labelled = '<a href="/x" aria-label="Ata">x</a>'
    override(labelled)

    r = client.post("/enhance", json={"html": '<a href="/x">x</a>', "department": "saude"})
    assert r.status_code == 200
    assert r.json() == {"html": labelled}


def test_enhance_endpoint_failure():
    override("nada de html aqui")

    r = client.post("/enhance", json={"html": '<a href="/x">x</a>', "department": "saude"})
    assert r.status_code == 502
    assert r.json()["detail"].startswith("HTML transformation failed: ")


def test_process_runs_enhancement_on_rewritten_html():
    fake = override('<a href="/documents/d/saude/529-re-pdf" aria-label="529ª RE">x</a>')

    r = client.post("/process", json={"html": PAGE, "options": OPTIONS})
    assert r.status_code == 200

    data = r.json()
    assert fake.seen == ['<a href="/documents/d/saude/529-re-pdf">x</a>']
    assert 'aria-label="529ª RE"' in data["enhanced_html"]
    assert data["enhancement_error"] is None
    assert data["normalization"]["urls_normalized"] == 1


def test_process_keeps_url_phase_when_enhancement_fails():
    override("<<<")

    r = client.post("/process", json={"html": PAGE, "options": OPTIONS})
    assert r.status_code == 200

    data = r.json()
    assert data["enhanced_html"] is None
    assert data["enhancement_error"].startswith("HTML transformation failed: ")
    assert data["normalization"]["processed_html"] == '<a href="/documents/d/saude/529-re-pdf">x</a>'
    assert data["normalization"]["urls_normalized"] == 1
    assert "normalizeUrl-final" in data["normalization"]["debug_output"]


def test_process_without_enhancement():
    fake = override("unused")

    r = client.post("/process", json={"html": PAGE, "options": OPTIONS, "enhance": False})
    assert r.status_code == 200
    assert r.json()["enhanced_html"] is None
    assert fake.seen == []
