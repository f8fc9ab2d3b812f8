"""
Tests for the grammar registry and end-to-end conversion with real
tree-sitter grammars. Grammar-dependent tests are skipped when the grammar
package is not installed.
"""

import pytest
from codeflow.frontend import languages
from codeflow.frontend.languages import (
    EXAMPLE_CODES,
    LANGUAGES,
    GrammarNotInstalledError,
    UnsupportedLanguageError,
    detect_language,
    flowchart_from_source,
    get_language_info,
    get_parser,
)


def require_grammar(language):
    pytest.importorskip(LANGUAGES[language].module)


def texts(chart):
    return [n.text for n in chart.flow_nodes()]


def decisions(chart):
    return [n for n in chart.flow_nodes() if n.type == "decision"]


class TestRegistry:

    def test_supported_languages(self):
        assert list(LANGUAGES) == ["javascript", "python", "c", "go", "rust", "java", "cpp"]

    def test_every_language_has_an_example(self):
        assert set(EXAMPLE_CODES) == set(LANGUAGES)

    def test_package_name(self):
        assert get_language_info("cpp").package == "tree-sitter-cpp"

    def test_unknown_language(self):
        with pytest.raises(UnsupportedLanguageError, match="Unknown language: cobol"):
            get_language_info("cobol")

    def test_unknown_language_is_value_error(self):
        with pytest.raises(ValueError):
            get_parser("cobol")

    @pytest.mark.parametrize("path,expected", [
        ("main.c", "c"),
        ("app/script.PY", "python"),
        ("lib.rs", "rust"),
        ("Main.java", "java"),
        ("server.go", "go"),
        ("index.mjs", "javascript"),
        ("engine.cpp", "cpp"),
    ])
    def test_detect_language(self, path, expected):
        assert detect_language(path) == expected

    def test_detect_unknown_extension(self):
        with pytest.raises(UnsupportedLanguageError):
            detect_language("notes.txt")

    def test_missing_grammar(self, monkeypatch):
        def fail(name):
            raise ImportError(f"No module named '{name}'")

        monkeypatch.setattr(languages.importlib, "import_module", fail)

        with pytest.raises(GrammarNotInstalledError, match="pip install tree-sitter-c"):
            get_parser("c")


class TestExamples:

    @pytest.mark.parametrize("language", list(LANGUAGES))
    @pytest.mark.parametrize("grouped", [False, True])
    def test_examples_produce_connected_graphs(self, language, grouped):
        require_grammar(language)

        chart = flowchart_from_source(EXAMPLE_CODES[language], language, group_sequential=grouped)
        nodes = chart.flow_nodes()
        ids = [n.id for n in nodes]

        assert nodes[0].id == "start-0"
        assert nodes[-1].id == "end-0"
        assert nodes[-1].targets == []
        assert len(decisions(chart)) == 1
        for n in nodes:
            assert len(n.targets) == len(set(n.targets))
            assert all(t in ids for t in n.targets)
            if n.type != "end":
                assert n.targets

    @pytest.mark.parametrize("language,label", [
        ("javascript", "(count < 3)"),
        ("python", "x < 5"),
        ("c", "i < count"),
        ("go", "i < 5"),
        ("rust", "n < 5"),
        ("java", "i < 5"),
    ])
    def test_example_loop_conditions(self, language, label):
        require_grammar(language)

        chart = flowchart_from_source(EXAMPLE_CODES[language], language)

        assert decisions(chart)[0].text == label

    def test_chart_named_after_language(self):
        require_grammar("python")
        assert flowchart_from_source("x = 1", "python").name == "Python"
        assert flowchart_from_source("x = 1", "python", name="Mine").name == "Mine"


class TestPython:

    @pytest.fixture(autouse=True)
    def grammar(self):
        require_grammar("python")

    def test_while_loop(self):
        chart = flowchart_from_source(EXAMPLE_CODES["python"], "python")

        assert [(n.id, n.text, n.targets) for n in chart.flow_nodes()] == [
            ("start-0", "Start", ["process-0"]),
            ("process-0", "x = 0", ["decision-0"]),
            ("decision-0", "x < 5", ["process-1", "process-3"]),
            ("process-1", "print(x)", ["process-2"]),
            ("process-2", "x += 1", ["decision-0"]),
            ("process-3", 'print("Done")', ["end-0"]),
            ("end-0", "End", []),
        ]

    def test_grouped_while_loop(self):
        chart = flowchart_from_source(EXAMPLE_CODES["python"], "python", group_sequential=True)

        assert texts(chart) == ["Start", "x = 0", "x < 5", "print(x)\nx += 1", 'print("Done")', "End"]

    def test_for_in_range(self):
        chart = flowchart_from_source("for i in range(3):\n    print(i)\n", "python")

        assert decisions(chart)[0].text == "in range(3)"

    def test_if_else(self):
        source = "if ok:\n    a()\nelse:\n    b()\ndone()\n"

        chart = flowchart_from_source(source, "python")
        index = chart.nodes

        assert texts(chart) == ["Start", "ok", "a()", "b()", "done()", "End"]
        assert index["decision-0"].targets == ["process-0", "process-1"]
        assert index["process-0"].targets == ["process-2"]
        assert index["process-1"].targets == ["process-2"]

    def test_function_body(self):
        source = "def main():\n    setup()\n    run()\n"

        chart = flowchart_from_source(source, "python", group_sequential=True)

        assert texts(chart) == ["Start", "setup()\nrun()", "End"]


class TestC:

    @pytest.fixture(autouse=True)
    def grammar(self):
        require_grammar("c")

    def test_for_loop(self):
        source = "int main() { for (i = 0; i < count; i++) { sum += i; } }"

        chart = flowchart_from_source(source, "c", group_sequential=True)

        assert [(n.id, n.text, n.targets) for n in chart.flow_nodes()] == [
            ("start-0", "Start", ["process-0"]),
            ("process-0", "i = 0", ["decision-0"]),
            ("decision-0", "i < count", ["process-1", "end-0"]),
            ("process-1", "sum += i;", ["process-2"]),
            ("process-2", "i++", ["decision-0"]),
            ("end-0", "End", []),
        ]

    def test_empty_while_true(self):
        chart = flowchart_from_source("void spin() { while (true) {} }", "c")

        assert [(n.id, n.targets) for n in chart.flow_nodes()] == [
            ("start-0", ["decision-0"]),
            ("decision-0", ["decision-0", "end-0"]),
            ("end-0", []),
        ]

    def test_example_grouping(self):
        chart = flowchart_from_source(EXAMPLE_CODES["c"], "c", group_sequential=True)
        index = chart.nodes

        assert index["process-0"].text == "int i;\nint sum = 0;\nint count = 5;"
        assert index["process-1"].text == "i = 0"
        assert index["process-3"].text == "i++"
        assert index["process-3"].targets == ["decision-0"]
        assert index["decision-0"].targets == ["process-2", "process-4"]


class TestOtherGrammars:

    def test_go_for_clause(self):
        require_grammar("go")

        chart = flowchart_from_source(EXAMPLE_CODES["go"], "go", group_sequential=True)
        processes = {n.text: n for n in chart.flow_nodes() if n.type == "process"}

        assert "i := 0" in processes
        assert processes["i++"].targets == ["decision-0"]

    def test_rust_loop_expression(self):
        require_grammar("rust")

        chart = flowchart_from_source("fn main() { loop { tick(); } }", "rust")

        assert decisions(chart)[0].text == "true"

    def test_java_method_in_class(self):
        require_grammar("java")

        chart = flowchart_from_source(EXAMPLE_CODES["java"], "java")

        assert texts(chart) == ["Start", "int i = 0;", "i < 5", "System.out.println(i);", "i++", "End"]

    def test_go_range_loop(self):
        require_grammar("go")

        source = "package main\nfunc main() {\n for _, v := range xs {\n  use(v)\n }\n}\n"
        chart = flowchart_from_source(source, "go")

        assert texts(chart) == ["Start", "Range Loop", "use(v)", "End"]
        assert chart.get_node("process-0").targets == ["decision-0"]
        assert chart.get_node("decision-0").targets == ["process-0", "end-0"]

    def test_javascript_class_method(self):
        require_grammar("javascript")

        chart = flowchart_from_source("class A { run(a) { go(); } }", "javascript")

        assert texts(chart) == ["Start", "go();", "End"]
        assert decisions(chart) == []
