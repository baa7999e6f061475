import unittest

from spoon.dtos.github import ImportantFile
from spoon.services.analysis.context_builder import build_context


class TestBuildContext(unittest.TestCase):
    def test_no_files(self):
        context = build_context({})
        self.assertTrue(context.startswith("\nAdditional Repository Files Analysis:\n"))
        self.assertIn("No additional configuration files found.", context)
        self.assertNotIn("Found Configuration Files", context)

    def test_truncates_to_budget(self):
        files = {
            "readme": ImportantFile(path="README.md", content="r" * 1500),
            "requirements": ImportantFile(path="requirements.txt", content="q" * 100),
        }
        context = build_context(files)
        self.assertIn("README.md Content (README.md):\n" + "r" * 1000 + "...\n", context)
        self.assertNotIn("r" * 1001, context)
        self.assertIn("Requirements.txt Content (requirements.txt):\n" + "q" * 100 + "\n", context)
        self.assertIn("Found Configuration Files: README.md, requirements.txt", context)

    def test_exact_budget_is_not_marked(self):
        files = {"packageJson": ImportantFile(path="package.json", content="p" * 800)}
        context = build_context(files)
        self.assertIn("p" * 800 + "\n", context)
        self.assertNotIn("p" * 800 + "...", context)

    def test_catalogue_order(self):
        files = {
            "pomXml": ImportantFile(path="pom.xml", content="<project/>"),
            "readme": ImportantFile(path="README.md", content="# hi"),
        }
        context = build_context(files)
        self.assertLess(context.index("README.md Content"), context.index("POM.xml Content"))


if __name__ == "__main__":
    unittest.main()
