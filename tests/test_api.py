import json

import pytest
from fastapi.testclient import TestClient

from fakes import SAMPLE_ANALYSIS, FakeCompiler, FakeGenerator, make_profile, text_pdf
from resumeaid.api import create_app
from resumeaid.compiler import CompilationError
from resumeaid.profile_store import ProfileStore


@pytest.fixture
def store(tmp_path):
    return ProfileStore(str(tmp_path / "profiles.json"))


def _client(store, generator=None, compiler=None, analyzer_generator=None) -> TestClient:
    app = create_app(
        generator=generator or FakeGenerator(reply="\\section*{Skills}\n\\item Python"),
        analyzer_generator=analyzer_generator,
        compiler=compiler or FakeCompiler(),
        store=store,
    )
    return TestClient(app)


def test_health(store):
    assert _client(store).get("/health").json() == {"status": "ok"}


def test_generate_resume_returns_wrapped_latex(store):
    body = {"profile": make_profile().to_json_dict(), "jobDescription": "Python", "targetRole": "Engineer"}
    resp = _client(store).post("/api/generate-resume", json=body)
    assert resp.status_code == 200
    data = resp.json()
    assert data["source"] == "ai"
    assert data["latex"].startswith("\\documentclass")
    assert "\\begin{itemize}\n\\item Python\n\\end{itemize}" in data["latex"]


def test_generate_resume_falls_back_to_template(store):
    client = _client(store, generator=FakeGenerator(error=TimeoutError("slow model")))
    body = {"profile": make_profile().to_json_dict(), "targetRole": "Engineer"}
    resp = client.post("/api/generate-resume", json=body)
    assert resp.status_code == 200
    assert resp.json()["source"] == "template"


@pytest.mark.parametrize(
    "body",
    [
        {"targetRole": "Engineer"},
        {"profile": None, "targetRole": "Engineer"},
        {"profile": {"fullName": "Ada", "email": "ada@example.com", "phone": "1", "location": "x"}},
        {"profile": {"fullName": "Ada", "email": "ada@example.com", "phone": "1", "location": "x"}, "targetRole": " "},
    ],
)
def test_generate_resume_missing_fields(store, body):
    resp = _client(store).post("/api/generate-resume", json=body)
    assert resp.status_code == 400
    assert resp.json() == {"error": "Missing required fields"}


def test_compile_latex_returns_pdf(store):
    compiler = FakeCompiler(pdf=b"%PDF-1.4 ok")
    resp = _client(store, compiler=compiler).post("/api/compile-latex", json={"latex": "\\documentclass{article}"})
    assert resp.status_code == 200
    assert resp.content == b"%PDF-1.4 ok"
    assert resp.headers["content-type"] == "application/pdf"
    assert resp.headers["content-disposition"] == 'inline; filename="resume.pdf"'
    assert compiler.sources == ["\\documentclass{article}"]


def test_compile_latex_requires_source(store):
    resp = _client(store).post("/api/compile-latex", json={"latex": ""})
    assert resp.status_code == 400
    assert resp.json() == {"error": "No LaTeX provided"}


def test_compile_latex_surfaces_compiler_message(store):
    compiler = FakeCompiler(error=CompilationError("Undefined control sequence."))
    resp = _client(store, compiler=compiler).post("/api/compile-latex", json={"latex": "\\foo"})
    assert resp.status_code == 500
    assert resp.json() == {"error": "Undefined control sequence."}


def test_analyze_resume(store):
    analyzer = FakeGenerator(reply=json.dumps(SAMPLE_ANALYSIS))
    client = _client(store, analyzer_generator=analyzer)
    resp = client.post(
        "/api/analyze-resume",
        files={"file": ("resume.pdf", text_pdf("Senior Python Developer"), "application/pdf")},
        data={"targetRole": "Backend Engineer"},
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["atsScore"] == 72
    assert data["jobProbability"] == 65.0
    assert len(data["roadmap"]) == 4
    assert "Backend Engineer" in analyzer.prompts[0]


def test_analyze_resume_without_file(store):
    resp = _client(store).post("/api/analyze-resume", data={"targetRole": "Engineer"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "No file provided"}


def test_analyze_resume_bad_model_reply(store):
    client = _client(store, analyzer_generator=FakeGenerator(reply="I cannot help with that"))
    resp = client.post(
        "/api/analyze-resume",
        files={"file": ("resume.pdf", text_pdf("Senior Python Developer"), "application/pdf")},
        data={"targetRole": "Engineer"},
    )
    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to analyze resume"}


def test_sanitize_endpoint(store):
    resp = _client(store).post("/api/sanitize", json={"latex": "```latex\n\\item a\n```"})
    assert resp.json() == {"latex": "\\begin{itemize}\n\\item a\n\\end{itemize}"}
    assert _client(store).post("/api/sanitize", json={}).json() == {"latex": ""}


def test_profile_crud(store):
    client = _client(store)
    assert client.get("/api/profiles").json() == []

    created = client.post("/api/profiles", json=make_profile(id="abc").to_json_dict())
    assert created.status_code == 200
    assert created.json()["createdAt"]

    listed = client.get("/api/profiles").json()
    assert [p["id"] for p in listed] == ["abc"]
    assert client.get("/api/profiles/abc").json()["fullName"] == "Ada Lovelace"

    assert client.delete("/api/profiles/abc").json() == {"deleted": "abc"}
    missing = client.get("/api/profiles/abc")
    assert missing.status_code == 404
    assert missing.json() == {"error": "Profile not found"}
    assert client.delete("/api/profiles/abc").status_code == 404


def test_save_profile_rejects_invalid_email(store):
    bad = make_profile().to_json_dict()
    bad["email"] = "nope"
    resp = _client(store).post("/api/profiles", json=bad)
    assert resp.status_code == 422
    assert store.get_all() == []
