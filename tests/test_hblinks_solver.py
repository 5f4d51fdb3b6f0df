import unittest

from hubsolver.core.transport import TransportError
from hubsolver.core.vocabulary import ExtractionVocabulary
from hubsolver.solvers.hblinks import HBLinksSolver

from _fakes import DictSettings, FakeTransport


class TestHBLinksSolver(unittest.TestCase):
    def test_priority_one_wins_regardless_of_position(self):
        html = (
            '<a href="https://hubdrive.space/file/1">HubDrive</a>'
            '<p>mirror list</p>'
            '<a href="https://hubcloud.foo/drive/abc">HubCloud</a>'
        )
        result = HBLinksSolver(transport=FakeTransport()).parse(html)
        self.assertTrue(result.ok)
        self.assertEqual(result.payload["link"], "https://hubcloud.foo/drive/abc")
        self.assertEqual(result.payload["source"], "HubCloud (Priority 1)")

    def test_priority_two_when_no_priority_one(self):
        result = HBLinksSolver(transport=FakeTransport()).parse(
            '<a href="https://example.com">home</a><a href="https://hubdrive.space/file/7">HubDrive</a>'
        )
        self.assertEqual(
            result.to_dict(),
            {"status": "success", "link": "https://hubdrive.space/file/7", "source": "HubDrive (Priority 2)"},
        )

    def test_not_found(self):
        result = HBLinksSolver(transport=FakeTransport()).parse('<a href="https://example.com">home</a>')
        self.assertTrue(result.is_fail)
        self.assertEqual(result.message, "Not Found")
        self.assertEqual(result.payload, {})

    def test_alternate_priority_hosts(self):
        vocab = ExtractionVocabulary(priority_hosts=(("gdflix", "GDFlix (Priority 1)"),))
        result = HBLinksSolver(transport=FakeTransport(), vocabulary=vocab).parse(
            '<a href="https://hubcloud.foo/drive/abc">x</a><a href="https://new.gdflix.dev/file/1">y</a>'
        )
        self.assertEqual(result.payload["link"], "https://new.gdflix.dev/file/1")

    def test_solve_fetches_and_parses(self):
        url = "https://hblinks.dad/archives/101"
        transport = FakeTransport({url: (200, '<a href="https://hubcloud.foo/drive/x">go</a>')})
        result = HBLinksSolver(transport=transport).solve(url)
        self.assertEqual(result.payload["link"], "https://hubcloud.foo/drive/x")
        self.assertEqual(transport.urls, [url])
        self.assertIn("Chrome/91", transport.calls[0][1]["User-Agent"])

    def test_non_2xx_is_fail_with_status(self):
        url = "https://hblinks.dad/archives/404"
        transport = FakeTransport({url: (503, '<a href="https://hubcloud.foo/drive/x">go</a>')})
        result = HBLinksSolver(transport=transport).solve(url)
        self.assertTrue(result.is_fail)
        self.assertEqual(result.message, "Cannot open page. Status: 503")

    def test_transport_error_is_error(self):
        url = "https://hblinks.dad/archives/1"
        transport = FakeTransport({url: TransportError("Connection refused")})
        result = HBLinksSolver(transport=transport).solve(url)
        self.assertTrue(result.is_error)
        self.assertEqual(result.message, "Connection refused")

    def test_settings_override_headers_and_timeout(self):
        url = "https://hblinks.dad/archives/2"
        settings = DictSettings({
            "hblinks_headers": {"User-Agent": "custom-agent"},
            "request_timeout_seconds": 9.0,
        })
        transport = FakeTransport({url: (200, "")})
        HBLinksSolver(transport=transport, settings=settings).solve(url)
        _, headers, timeout = transport.calls[0]
        self.assertEqual(headers, {"User-Agent": "custom-agent"})
        self.assertEqual(timeout, 9.0)

    def test_can_handle(self):
        solver = HBLinksSolver(transport=FakeTransport())
        self.assertTrue(solver.can_handle("https://HBLinks.dad/archives/1"))
        self.assertFalse(solver.can_handle("https://hubdrive.space/file/1"))


if __name__ == "__main__":
    unittest.main()
