import sys
import unittest
from dataclasses import replace
from io import BytesIO
from pathlib import Path
from unittest.mock import patch
from zipfile import ZipFile

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from docx import Document  # noqa: E402

from resume_reviewer.core.config import settings  # noqa: E402
from resume_reviewer.core.errors import NoExtractableTextError, UnsupportedFileTypeError  # noqa: E402
from resume_reviewer.services.extraction import extract_text  # noqa: E402
from resume_reviewer.services.file_security import DOCX_MIME  # noqa: E402
from tests.pdf_samples import build_pdf  # noqa: E402

OCR_ON = replace(settings, ocr_enabled=True, ocr_api_key="test-key")
OCR_OFF = replace(settings, ocr_enabled=False)


def _docx_bytes(*paragraphs: str) -> bytes:
    document = Document()
    for paragraph in paragraphs:
        document.add_paragraph(paragraph)
    buffer = BytesIO()
    document.save(buffer)
    return buffer.getvalue()


def _bare_docx_bytes(text: str) -> bytes:
    # Only word/document.xml, so python-docx refuses it and the XML fallback runs.
    buffer = BytesIO()
    with ZipFile(buffer, "w") as archive:
        archive.writestr(
            "word/document.xml",
            (
                '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
                '<w:document xmlns:w="http://schemas.openxmlformats.org/wordprocessingml/2006/main">'
                f"<w:body><w:p><w:r><w:t>{text}</w:t></w:r></w:p></w:body></w:document>"
            ),
        )
    return buffer.getvalue()


class TextExtractionTests(unittest.TestCase):
    def test_plain_text_is_decoded_as_utf8(self):
        content = "Zoë Müller\nSenior Engineer".encode("utf-8")
        text = extract_text(content=content, mime="text/plain", filename="resume.txt")
        self.assertEqual(text, "Zoë Müller\nSenior Engineer")

    def test_nul_characters_are_stripped(self):
        text = extract_text(content=b"Jane\x00 Doe\x00", mime="text/plain", filename="resume.txt")
        self.assertEqual(text, "Jane Doe")

    def test_docx_paragraphs_are_extracted(self):
        content = _docx_bytes("Jane Doe", "Built billing APIs in Python")
        text = extract_text(content=content, mime=DOCX_MIME, filename="resume.docx")
        self.assertIn("Jane Doe", text)
        self.assertIn("Built billing APIs in Python", text)

    def test_docx_table_cells_are_extracted(self):
        document = Document()
        document.add_paragraph("Profile")
        row = document.add_table(rows=1, cols=2).rows[0]
        row.cells[0].text = "Jane Doe"
        row.cells[1].text = "Senior Backend Engineer, Python"
        document.add_paragraph("References on request")
        buffer = BytesIO()
        document.save(buffer)

        text = extract_text(content=buffer.getvalue(), mime=DOCX_MIME, filename="resume.docx")
        lines = [line for line in text.splitlines() if line.strip()]
        self.assertEqual(
            lines,
            ["Profile", "Jane Doe", "Senior Backend Engineer, Python", "References on request"],
        )

    def test_table_only_docx_is_not_empty(self):
        document = Document()
        document.add_table(rows=1, cols=1).rows[0].cells[0].text = "Jane Doe, Python developer"
        buffer = BytesIO()
        document.save(buffer)

        text = extract_text(content=buffer.getvalue(), mime=DOCX_MIME, filename="resume.docx")
        self.assertIn("Jane Doe, Python developer", text)

    def test_docx_xml_fallback(self):
        content = _bare_docx_bytes("Docx fallback extraction works")
        text = extract_text(content=content, mime=DOCX_MIME, filename="resume.docx")
        self.assertEqual(text, "Docx fallback extraction works")

    def test_pdf_text_layer(self):
        content = build_pdf(["Jane Doe", "Senior Backend Engineer"])
        text = extract_text(content=content, mime="application/pdf", filename="resume.pdf")
        self.assertIn("Jane Doe", text)
        self.assertIn("Senior Backend Engineer", text)
        self.assertNotIn("\x00", text)

    def test_pdf_nul_artifacts_are_removed(self):
        content = build_pdf(["Jane Doe"], raw_strings=["Python\\000Developer"])
        text = extract_text(content=content, mime="application/pdf", filename="resume.pdf")
        self.assertTrue(text.strip())
        self.assertNotIn("\x00", text)


class DispatchTests(unittest.TestCase):
    def test_generic_mime_falls_back_to_extension(self):
        pdf_text = extract_text(
            content=build_pdf(["Jane Doe"]),
            mime="application/octet-stream",
            filename="resume.PDF",
        )
        self.assertIn("Jane Doe", pdf_text)

        docx_text = extract_text(
            content=_docx_bytes("Zip typed docx"),
            mime="application/zip",
            filename="resume.docx",
        )
        self.assertIn("Zip typed docx", docx_text)

        txt_text = extract_text(content=b"Plain resume text", mime="", filename="notes.txt")
        self.assertEqual(txt_text, "Plain resume text")

    def test_mime_parameters_are_ignored(self):
        text = extract_text(content=b"Plain resume text", mime="text/plain; charset=utf-8", filename="r")
        self.assertEqual(text, "Plain resume text")

    def test_specific_mime_wins_over_extension(self):
        text = extract_text(content=b"Actually text", mime="text/plain", filename="resume.pdf")
        self.assertEqual(text, "Actually text")

    def test_unsupported_types_are_rejected(self):
        cases = [
            ("image/png", "photo.png"),
            ("application/octet-stream", "malware.exe"),
            ("application/octet-stream", "no-extension"),
            ("text/html", "resume.txt"),
        ]
        for mime, filename in cases:
            with self.subTest(mime=mime, filename=filename):
                with self.assertRaises(UnsupportedFileTypeError) as ctx:
                    extract_text(content=b"data", mime=mime, filename=filename)
                self.assertEqual(ctx.exception.status_code, 400)
                self.assertIn("unsupported", ctx.exception.message.lower())

    def test_legacy_doc_gets_conversion_hint(self):
        with self.assertRaises(UnsupportedFileTypeError) as ctx:
            extract_text(content=b"\xD0\xCF\x11\xE0\xA1\xB1\x1A\xE1", mime="application/msword", filename="cv.doc")
        self.assertIn("convert to .docx", ctx.exception.message.lower())

    def test_signature_mismatch_is_rejected(self):
        with self.assertRaises(UnsupportedFileTypeError) as ctx:
            extract_text(content=b"plain text pretending to be a pdf", mime="application/pdf", filename="resume.pdf")
        self.assertIn("signature", ctx.exception.message.lower())

        with self.assertRaises(UnsupportedFileTypeError):
            extract_text(content=b"not a zip", mime=DOCX_MIME, filename="resume.docx")


class EmptyTextTests(unittest.TestCase):
    def test_scanned_pdf_without_ocr_reports_hint_and_diagnostics(self):
        content = build_pdf()
        with patch("resume_reviewer.services.extraction.settings", OCR_OFF), patch(
            "resume_reviewer.services.extraction.ocr_pdf_text"
        ) as ocr:
            with self.assertRaises(NoExtractableTextError) as ctx:
                extract_text(content=content, mime="application/pdf", filename="scan.pdf")
        ocr.assert_not_called()
        payload = ctx.exception.payload()
        self.assertEqual(ctx.exception.status_code, 422)
        self.assertIn("OCR", payload["hint"])
        self.assertIn("text-based", payload["hint"])
        self.assertEqual(payload["bytes"], len(content))
        self.assertEqual(payload["name"], "scan.pdf")
        self.assertEqual(payload["ext"], "pdf")
        self.assertEqual(payload["mime"], "application/pdf")

    def test_scanned_pdf_uses_ocr_text_when_enabled(self):
        content = build_pdf()
        with patch("resume_reviewer.services.extraction.settings", OCR_ON), patch(
            "resume_reviewer.services.extraction.ocr_pdf_text",
            return_value="Jane Doe\x00\nScanned resume text",
        ) as ocr:
            text = extract_text(content=content, mime="application/pdf", filename="scan.pdf")
        ocr.assert_called_once_with(content=content, filename="scan.pdf")
        self.assertEqual(text, "Jane Doe\nScanned resume text")

    def test_empty_ocr_result_still_fails(self):
        with patch("resume_reviewer.services.extraction.settings", OCR_ON), patch(
            "resume_reviewer.services.extraction.ocr_pdf_text",
            return_value="  \n ",
        ):
            with self.assertRaises(NoExtractableTextError) as ctx:
                extract_text(content=build_pdf(), mime="application/pdf", filename="scan.pdf")
        self.assertIn("OCR could not read", ctx.exception.hint)

    def test_pdf_with_text_layer_skips_ocr(self):
        with patch("resume_reviewer.services.extraction.settings", OCR_ON), patch(
            "resume_reviewer.services.extraction.ocr_pdf_text"
        ) as ocr:
            extract_text(content=build_pdf(["Jane Doe"]), mime="application/pdf", filename="resume.pdf")
        ocr.assert_not_called()

    def test_blank_text_file_is_not_sent_to_ocr(self):
        with patch("resume_reviewer.services.extraction.settings", OCR_ON), patch(
            "resume_reviewer.services.extraction.ocr_pdf_text"
        ) as ocr:
            with self.assertRaises(NoExtractableTextError) as ctx:
                extract_text(content=b"   \n\t", mime="text/plain", filename="blank.txt")
        ocr.assert_not_called()
        self.assertEqual(ctx.exception.payload()["ext"], "txt")


if __name__ == "__main__":
    unittest.main()
