import unittest
from unittest import mock

from fastapi.testclient import TestClient


SAMPLE = (
    "Handle,Title,Tags,Option1 Value,Variant Price,Published,Image Src\n"
    "shirt,Shirt,\"a, b\",Small,10,TRUE,x.png\n"
    "shirt,,,Large,12,,x.png\n"
    "hat,Hat,,,7,,\n"
).encode("utf-8")


class TestApp(unittest.TestCase):
    def setUp(self):
        from server.app import app

        self.client = TestClient(app)

    def _post(self, path, data=b"", **form):
        form.setdefault("currency_code", "usd")
        return self.client.post(path, files={"file": ("products.csv", data, "text/csv")}, data=form)

    def test_health(self):
        resp = self.client.get("/health")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"status": "ok"})

    def test_home_page(self):
        resp = self.client.get("/")
        self.assertEqual(resp.status_code, 200)
        self.assertIn("Target currency", resp.text)

    def test_convert_returns_csv_download(self):
        resp = self._post("/convert", SAMPLE)
        self.assertEqual(resp.status_code, 200)
        self.assertTrue(resp.headers["content-type"].startswith("text/csv"))
        self.assertIn('filename="medusa_products.csv"', resp.headers["content-disposition"])
        self.assertEqual(resp.headers["x-products"], "2")
        self.assertEqual(resp.headers["x-variants"], "3")
        header = resp.text.split("\r\n")[0]
        self.assertIn('"Variant Price USD"', header)
        self.assertIn('"Product Tag 2"', header)

    def test_convert_with_sales_channel(self):
        resp = self._post("/convert", SAMPLE, use_sales_channel="true", sales_channel="")
        self.assertEqual(resp.status_code, 200)
        self.assertIn('"default"', resp.text)

    def test_preview(self):
        resp = self._post("/convert/preview", SAMPLE, currency_code="eur", markdown_description="on")
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["currency_code"], "EUR")
        self.assertEqual(body["summary"], {"products": 2, "variants": 3})
        self.assertIn("Variant Price EUR", body["columns"])
        self.assertEqual(len(body["rows"]), 3)
        self.assertEqual(body["rows"][0]["Product Title"], "Shirt")

    def test_invalid_currency(self):
        resp = self._post("/convert", SAMPLE, currency_code="euro")
        self.assertEqual(resp.status_code, 422)
        self.assertIn("Currency code must be 3 letters", resp.json()["detail"])

    def test_header_only_upload(self):
        resp = self._post("/convert", b"Handle,Title\n")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["detail"], "No products found in CSV")

    def test_undecodable_upload(self):
        resp = self._post("/convert", b"Handle\n\xff\xfe\xfa\n")
        self.assertEqual(resp.status_code, 400)

    def test_upload_too_large(self):
        from server import settings as app_settings

        limited = dict(app_settings.default_settings(), max_upload_mb=0)
        with mock.patch.object(app_settings, "get_settings", return_value=limited):
            resp = self._post("/convert", SAMPLE)
        self.assertEqual(resp.status_code, 413)

    def test_ui_preview_renders_stats_and_errors(self):
        resp = self._post("/ui/preview", SAMPLE)
        self.assertEqual(resp.status_code, 200)
        self.assertIn("2 products, 3 variants (USD)", resp.text)
        resp = self._post("/ui/preview", b"Handle,Title\n")
        self.assertEqual(resp.status_code, 400)
        self.assertIn("No products found in CSV", resp.text)

    def test_ui_convert_downloads_csv(self):
        resp = self._post("/ui/convert", SAMPLE)
        self.assertEqual(resp.status_code, 200)
        self.assertTrue(resp.headers["content-type"].startswith("text/csv"))
        self.assertEqual(resp.headers["x-variants"], "3")

    def test_ui_convert_failure_renders_error_banner(self):
        resp = self._post("/ui/convert", b"Handle,Title\n")
        self.assertEqual(resp.status_code, 400)
        self.assertTrue(resp.headers["content-type"].startswith("text/html"))
        self.assertIn('<p class="err">No products found in CSV</p>', resp.text)
        resp = self._post("/ui/convert", SAMPLE, currency_code="euro")
        self.assertEqual(resp.status_code, 422)
        self.assertIn("Currency code must be 3 letters", resp.text)

    def test_home_form_posts_to_ui_routes(self):
        resp = self.client.get("/")
        self.assertIn('action="/ui/convert"', resp.text)


if __name__ == "__main__":
    unittest.main()
