from pathlib import Path
import re
import unittest


PACKAGE = Path(__file__).resolve().parents[1] / "extensible_board"
BROAD = re.compile(r"^\s*except\s*(Exception\s*)?:", re.MULTILINE)


class TestNoBroadExceptHotPaths(unittest.TestCase):
    def test_no_broad_catches_in_package(self):
        violations = []
        for path in sorted(PACKAGE.rglob("*.py")):
            content = path.read_text(encoding="utf-8")
            for m in BROAD.finditer(content):
                line = content.count("\n", 0, m.start()) + 1
                violations.append(f"{path.relative_to(PACKAGE.parent)}:{line}")
        self.assertEqual(
            violations,
            [],
            msg="Broad except guard failed: " + ", ".join(violations),
        )


if __name__ == "__main__":
    unittest.main()
