import base64
import dataclasses
import json
import os
import unittest
from io import BytesIO
from unittest.mock import patch

# Keep API tests deterministic: no provider calls, no limiter state between tests.
os.environ.setdefault("LLM_ENABLED", "0")
os.environ.setdefault("RATE_LIMIT_ENABLED", "0")

from docx import Document
from fastapi.testclient import TestClient

from resume_ai.api.v1.resume import get_generative_client
from resume_ai.core.config import settings
from resume_ai.core.rate_limit import limiter
from resume_ai.main import app

RESUME_TEXT = (
    "Jane Doe\n"
    "jane@example.com | +1 555 123 4567\n"
    "Experience\n"
    "- Led Python and Docker migration to AWS, cutting costs 30%\n"
    "Skills: SQL, Git, Kubernetes, Linux\n"
    "Education\n"
    "BSc Computer Science"
)


class ScriptedClient:
    name = "scripted"

    def __init__(self, reply):
        self._reply = reply

    def generate(self, prompt):
        return self._reply


def _docx_base64(*paragraphs):
    document = Document()
    for paragraph in paragraphs:
        document.add_paragraph(paragraph)
    buffer = BytesIO()
    document.save(buffer)
    return base64.b64encode(buffer.getvalue()).decode("ascii")


class ResumeApiTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.client = TestClient(app, raise_server_exceptions=False)
        cls.payload = {
            "resumeText": RESUME_TEXT,
            "jobRole": "Software Engineer",
            "company": "Google",
        }

    def setUp(self):
        limiter.reset()
        app.dependency_overrides[get_generative_client] = lambda: None

    def tearDown(self):
        app.dependency_overrides.clear()

    def _post(self, payload, **kwargs):
        return self.client.post("/v1/resume/analyze", json=payload, **kwargs)

    def test_health(self):
        response = self.client.get("/v1/health")
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["status"], "healthy")
        self.assertEqual(body["version"], settings.app_version)
        self.assertIn("timestamp", body)

    def test_text_analysis_without_model(self):
        response = self._post(self.payload)
        self.assertEqual(response.status_code, 200)
        body = response.json()

        self.assertTrue(body["success"])
        self.assertNotIn("error", body)
        self.assertIsInstance(body["metadata"]["processingTimeMs"], int)
        data = body["data"]
        self.assertEqual(data["parsedResume"]["fileName"], "resume")
        self.assertEqual(data["parsedResume"]["fileType"], "text")
        self.assertEqual(data["parsedResume"]["characters"], len(RESUME_TEXT))

        ats = data["atsAnalysis"]
        self.assertEqual(ats["atsScore"], 100)
        self.assertEqual(ats["rawScore"], 129)
        self.assertEqual(ats["confidenceLevel"], "high")
        self.assertEqual(ats["analysisSource"], "heuristic")
        self.assertEqual(ats["matchedKeywords"], ["Python", "SQL", "Git", "Docker", "AWS", "Kubernetes", "Linux"])
        self.assertEqual(len(ats["missingKeywords"]), 10)
        self.assertEqual(ats["missingKeywords"][0], "Java")
        self.assertEqual([issue["code"] for issue in ats["issues"]], ["too-short"])
        self.assertIn("fixSuggestion", ats["issues"][0])

        self.assertEqual(data["aiImprovementSource"], "fallback")
        self.assertEqual(data["aiFallbackReason"], "client_unavailable")
        self.assertEqual(data["aiImprovements"]["estimatedImprovementScore"], 10)
        self.assertEqual(
            data["summary"],
            {
                "currentScore": 100,
                "potentialScore": 100,
                "topIssues": ["Resume too short - may lack detail needed by ATS"],
                "quickWins": [
                    "Start bullet points with strong action verbs",
                    "Add quantifiable metrics (%, $, numbers)",
                    "Avoid tables, icons, and special characters",
                ],
            },
        )

    def test_model_suggestions_are_marked_as_model_output(self):
        reply = json.dumps(
            {
                "improvedBullets": [{"original": "Led migration", "improved": "Led migration of 40 services"}],
                "formatTips": ["Use a single column"],
            }
        )
        app.dependency_overrides[get_generative_client] = lambda: ScriptedClient(reply)
        response = self._post(self.payload)
        self.assertEqual(response.status_code, 200)
        data = response.json()["data"]

        self.assertEqual(data["aiImprovementSource"], "model")
        self.assertNotIn("aiFallbackReason", data)
        self.assertEqual(data["aiImprovements"]["improvedBullets"][0]["impactScore"], 75)
        self.assertEqual(data["aiImprovements"]["keywordSuggestions"], ["Python", "Java", "JavaScript", "SQL", "Git"])
        self.assertEqual(data["summary"]["quickWins"], ["Use a single column"])

    def test_snake_case_fields_are_accepted(self):
        response = self._post({"resume_text": RESUME_TEXT, "job_role": "swe", "company": "google"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["data"]["atsAnalysis"]["rawScore"], 129)

    def test_docx_upload(self):
        payload = {
            "resumeFile": {"fileName": "jane.docx", "content": _docx_base64(*RESUME_TEXT.split("\n"))},
            "jobRole": "Software Engineer",
            "company": "Google",
        }
        response = self._post(payload)
        self.assertEqual(response.status_code, 200)
        parsed = response.json()["data"]["parsedResume"]
        self.assertEqual(parsed["fileName"], "jane.docx")
        self.assertEqual(parsed["fileType"], "docx")
        self.assertTrue(parsed["text"].startswith("Jane Doe\njane@example.com"))

    def test_missing_role_or_company(self):
        for payload in (
            {"resumeText": RESUME_TEXT, "company": "Google"},
            {"resumeText": RESUME_TEXT, "jobRole": "  ", "company": "Google"},
            {"resumeText": RESUME_TEXT, "jobRole": "Software Engineer"},
        ):
            with self.subTest(payload=payload):
                response = self._post(payload)
                self.assertEqual(response.status_code, 400)
                body = response.json()
                self.assertFalse(body["success"])
                self.assertNotIn("data", body)
                self.assertEqual(body["error"]["code"], "MISSING_FIELDS")
                self.assertEqual(body["error"]["message"], "jobRole and company are required")
                self.assertIn("timestamp", body["metadata"])

    def test_missing_resume(self):
        response = self._post({"jobRole": "Software Engineer", "company": "Google", "resumeText": ""})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"]["code"], "NO_RESUME")

    def test_malformed_body(self):
        response = self._post({"resumeText": 42, "jobRole": "Engineer", "company": "Acme"})
        self.assertEqual(response.status_code, 400)
        body = response.json()
        self.assertEqual(body["error"]["code"], "INVALID_REQUEST")
        self.assertIn("details", body["error"])

    def test_rejected_upload_name(self):
        payload = {
            "resumeFile": {"fileName": "resume.txt", "content": base64.b64encode(b"hello").decode("ascii")},
            "jobRole": "Software Engineer",
            "company": "Google",
        }
        response = self._post(payload)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"]["code"], "UPLOAD_FAILED")

    def test_data_url_without_payload(self):
        payload = {
            "resumeFile": {"fileName": "resume.pdf", "content": "data:application/pdf;base64"},
            "jobRole": "Software Engineer",
            "company": "Google",
        }
        response = self._post(payload)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"]["code"], "UPLOAD_FAILED")

    def test_unsupported_declared_type(self):
        payload = {
            "resumeFile": {"fileName": "resume.pdf", "fileType": "rtf", "content": "JVBERi0="},
            "jobRole": "Software Engineer",
            "company": "Google",
        }
        response = self._post(payload)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"]["code"], "UNSUPPORTED_FILE_TYPE")

    def test_unparsable_pdf(self):
        payload = {
            "resumeFile": {"fileName": "resume.pdf", "content": base64.b64encode(b"not a pdf").decode("ascii")},
            "jobRole": "Software Engineer",
            "company": "Google",
        }
        response = self._post(payload)
        self.assertEqual(response.status_code, 422)
        self.assertEqual(response.json()["error"]["code"], "RESUME_PARSE_FAILED")

    def test_oversized_upload(self):
        small_limit = dataclasses.replace(settings, max_upload_bytes=8)
        payload = {
            "resumeFile": {"fileName": "resume.docx", "content": _docx_base64("Jane Doe")},
            "jobRole": "Software Engineer",
            "company": "Google",
        }
        with patch("resume_ai.services.resume_service.settings", small_limit):
            response = self._post(payload)
        self.assertEqual(response.status_code, 413)
        self.assertEqual(response.json()["error"]["code"], "FILE_TOO_LARGE")

    def test_api_key_is_enforced_when_configured(self):
        keyed = dataclasses.replace(settings, api_key="secret-key")
        with patch("resume_ai.core.security.settings", keyed):
            denied = self._post(self.payload)
            wrong = self._post(self.payload, headers={"X-API-Key": "nope"})
            allowed = self._post(self.payload, headers={"X-API-Key": "secret-key"})
        self.assertEqual(denied.status_code, 401)
        self.assertEqual(denied.json()["error"]["code"], "UNAUTHORIZED")
        self.assertEqual(wrong.status_code, 401)
        self.assertEqual(allowed.status_code, 200)

    def test_unexpected_failure_is_wrapped(self):
        with patch("resume_ai.api.v1.resume.run_resume_analysis", side_effect=RuntimeError("boom")):
            response = self._post(self.payload)
        self.assertEqual(response.status_code, 500)
        body = response.json()
        self.assertFalse(body["success"])
        self.assertEqual(body["error"]["code"], "INTERNAL_ERROR")
        self.assertEqual(body["error"]["message"], "boom")
        self.assertIn("RuntimeError", body["error"]["details"])

    def test_unexpected_failure_is_opaque_in_production(self):
        production = dataclasses.replace(settings, app_env="production")
        with patch("resume_ai.api.v1.resume.run_resume_analysis", side_effect=RuntimeError("db password")), patch(
            "resume_ai.core.error_handlers.settings", production
        ):
            response = self._post(self.payload)
        self.assertEqual(response.status_code, 500)
        error = response.json()["error"]
        self.assertEqual(error["message"], "An error occurred during analysis")
        self.assertNotIn("details", error)


if __name__ == "__main__":
    unittest.main()
