import base64
import io
import sys
import tempfile
import unittest
from pathlib import Path

from docx import Document

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.parsing.parse import (  # noqa: E402
    ResumeExtractionError,
    extract_resume_text,
    is_base64_payload,
    is_file_path,
    parse_document,
)

RESUME_TEXT = "Jane Doe\njane@example.com | (555) 987-6543\nSKILLS\nPython, SQL\n"


def _data_url(raw: bytes) -> str:
    return "data:application/pdf;base64," + base64.b64encode(raw).decode("ascii")


class ParsingFacadeTests(unittest.TestCase):
    def test_parse_txt_returns_stable_parsed_doc(self):
        content = "Line one\n- Bullet item\nLine three"
        tmp_file = tempfile.NamedTemporaryFile("w", suffix=".txt", delete=False, encoding="utf-8")
        tmp_path = Path(tmp_file.name)
        try:
            tmp_file.write(content)
            tmp_file.close()

            parsed = parse_document(str(tmp_path))
            self.assertEqual(parsed.source_type, "txt")
            self.assertEqual(parsed.text, content)
            self.assertEqual(parsed.file_name, tmp_path.name)
            self.assertTrue(parsed.doc_id)
            self.assertEqual(parsed.doc_id, parse_document(str(tmp_path)).doc_id)
        finally:
            if tmp_path.exists():
                tmp_path.unlink()

    def test_missing_and_unsupported_files(self):
        with self.assertRaises(FileNotFoundError):
            parse_document("/definitely/not/here/resume.pdf")

        tmp_file = tempfile.NamedTemporaryFile("w", suffix=".rtf", delete=False, encoding="utf-8")
        tmp_path = Path(tmp_file.name)
        try:
            tmp_file.write("{\\rtf1 resume}")
            tmp_file.close()
            with self.assertRaises(NotImplementedError):
                parse_document(str(tmp_path))
        finally:
            if tmp_path.exists():
                tmp_path.unlink()


class ResumeExtractionTests(unittest.TestCase):
    def test_input_classification(self):
        self.assertTrue(is_base64_payload("data:application/pdf;base64,QUJD"))
        self.assertTrue(is_base64_payload("QUJD" * 30))
        self.assertFalse(is_base64_payload("QUJD"))
        self.assertFalse(is_base64_payload("/path/to/resume.pdf"))
        self.assertTrue(is_file_path("/path/to/resume.pdf"))
        self.assertTrue(is_file_path("resume.pdf"))
        self.assertFalse(is_file_path("short"))
        self.assertFalse(is_file_path("data:application/pdf;base64,QUJD"))

    def test_text_payload_in_data_url_is_decoded(self):
        parsed = extract_resume_text(_data_url(RESUME_TEXT.encode("utf-8")), file_name="resume.txt")
        self.assertEqual(parsed.source_type, "txt")
        self.assertEqual(parsed.text, RESUME_TEXT)
        self.assertEqual(parsed.file_name, "resume.txt")

    def test_docx_payload_is_parsed(self):
        document = Document()
        document.add_paragraph("Jane Doe")
        document.add_paragraph("EXPERIENCE")
        document.add_paragraph("Led a team of 4 engineers")
        buffer = io.BytesIO()
        document.save(buffer)

        parsed = extract_resume_text(_data_url(buffer.getvalue()))
        self.assertEqual(parsed.source_type, "docx")
        self.assertEqual(parsed.text, "Jane Doe\nEXPERIENCE\nLed a team of 4 engineers")
        self.assertEqual(len(parsed.blocks), 3)

    def test_bare_base64_docx_with_slashes_when_paths_disabled(self):
        document = Document()
        for index in range(30):
            document.add_paragraph(f"Delivered project {index} and improved throughput by {index}%")
        buffer = io.BytesIO()
        document.save(buffer)
        payload = base64.b64encode(buffer.getvalue()).decode("ascii")
        self.assertIn("/", payload)

        self.assertFalse(is_base64_payload(payload))
        self.assertTrue(is_base64_payload(payload, allow_file_paths=False))

        parsed = extract_resume_text(payload, allow_file_paths=False)
        self.assertEqual(parsed.source_type, "docx")
        self.assertEqual(len(parsed.blocks), 30)
        self.assertTrue(parsed.text.startswith("Delivered project 0"))

    def test_broken_pdf_degrades_to_empty_text_with_warning(self):
        parsed = extract_resume_text(_data_url(b"%PDF-1.4\nthis is not really a pdf"))
        self.assertEqual(parsed.source_type, "pdf")
        self.assertEqual(parsed.text, "")
        self.assertTrue(parsed.parsing_warnings)

    def test_empty_data_url_is_rejected(self):
        with self.assertRaisesRegex(ResumeExtractionError, "Empty base64 data"):
            extract_resume_text("data:application/pdf;base64,")

    def test_malformed_inputs_are_rejected(self):
        for value in ("", "short", "pdf", "invalid-base64-data-!@#$%^&*()"):
            with self.assertRaisesRegex(ResumeExtractionError, "Invalid input format"):
                extract_resume_text(value)

    def test_unsupported_file_extension_is_rejected(self):
        for value in ("/path/to/document.doc", "/path/to/document.png"):
            with self.assertRaises(ResumeExtractionError):
                extract_resume_text(value)

    def test_file_paths_can_be_disabled(self):
        with self.assertRaisesRegex(ResumeExtractionError, "Invalid input format"):
            extract_resume_text("/etc/resume.txt", allow_file_paths=False)


if __name__ == "__main__":
    unittest.main()
