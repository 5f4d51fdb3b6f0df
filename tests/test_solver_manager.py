import unittest

from hubsolver.core.solver_manager import SolverManager
from hubsolver.models.extraction_result import ExtractionResult
from hubsolver.solvers import HBLinksSolver, HubCDNResolver, HubDriveResolver, MoviePageExtractor
from hubsolver.solvers.base import BaseSolver

from _fakes import FakeTransport


class CrashingSolver(BaseSolver):
    name = "Crashing"
    domains = ("crash.test",)

    def _solve(self, url):
        raise RuntimeError("parser exploded")


def _manager(transport):
    sm = SolverManager()
    sm.register(HBLinksSolver(transport))
    sm.register(HubCDNResolver(transport))
    sm.register(HubDriveResolver(transport))
    sm.register(MoviePageExtractor(transport))
    return sm


class TestSolverManager(unittest.TestCase):
    def test_register_requires_basesolver(self):
        sm = SolverManager()

        class Invalid:
            name = "X"

            def solve(self, url):
                return ExtractionResult.fail("nope")

        with self.assertRaises(TypeError):
            sm.register(Invalid())

    def test_register_requires_name(self):
        solver = HBLinksSolver(FakeTransport())
        solver.name = ""
        with self.assertRaises(ValueError):
            SolverManager().register(solver)

    def test_routes_by_host_fragment(self):
        sm = _manager(FakeTransport())
        self.assertEqual(sm.select("https://hblinks.dad/archives/1").name, "HBLinks")
        self.assertEqual(sm.select("https://hubcdn.fans/file/1").name, "HubCDN")
        self.assertEqual(sm.select("https://hubdrive.space/file/1").name, "HubDrive")
        self.assertEqual(sm.select("https://hdhub4u.fo/some-movie/").name, "MoviePage")

    def test_generic_fallback_registered_first_does_not_shadow_domains(self):
        transport = FakeTransport()
        sm = SolverManager()
        sm.register(MoviePageExtractor(transport))
        sm.register(HubDriveResolver(transport))
        self.assertEqual(sm.select("https://hubdrive.space/file/1").name, "HubDrive")

    def test_no_solver_for_url(self):
        sm = SolverManager()
        sm.register(HubDriveResolver(FakeTransport()))
        with self.assertRaises(LookupError):
            sm.select("https://example.com/")

    def test_resolve_tags_solver_name(self):
        url = "https://hubdrive.space/file/1"
        transport = FakeTransport({url: (200, '<a id="dl" href="https://hubcloud.foo/d/1">go</a>')})
        result = _manager(transport).resolve(url)
        self.assertEqual(
            result.to_dict(),
            {"status": "success", "link": "https://hubcloud.foo/d/1", "solver": "HubDrive"},
        )

    def test_resolve_keeps_fail_message(self):
        url = "https://hblinks.dad/archives/1"
        result = _manager(FakeTransport({url: (200, "<p>empty</p>")})).resolve(url)
        self.assertEqual(result.to_dict(), {"status": "fail", "message": "Not Found"})

    def test_unexpected_solver_exception_becomes_error(self):
        sm = SolverManager()
        sm.register(CrashingSolver(FakeTransport()))
        result = sm.resolve("https://crash.test/x")
        self.assertTrue(result.is_error)
        self.assertEqual(result.message, "parser exploded")

    def test_get_and_describe(self):
        sm = _manager(FakeTransport())
        self.assertIsInstance(sm.get("HubCDN"), HubCDNResolver)
        with self.assertRaises(KeyError):
            sm.get("Missing")
        described = {d["name"]: d for d in sm.describe()}
        self.assertTrue(described["MoviePage"]["generic"])
        self.assertEqual(described["HBLinks"]["domains"], ["hblinks"])


if __name__ == "__main__":
    unittest.main()
