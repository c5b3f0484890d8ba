"""End-to-end tests for the composable API functions in protoclass.api."""

import pytest

from protoclass.api import convert_source, parse_source, transform_source
from protoclass.errors import UnparseableSourceError
from protoclass.transform_types import TransformConfig, TransformResult

CONSTRUCTOR_SOURCE = """\
function Foo(a) {
  this.a = a;
}
"""

FULL_SOURCE = """\
// Counts things.
function Counter(start) {
  this.count = start;
}

Counter.prototype.step = 1;

Counter.prototype.increment = function () {
  this.count += this.step;
  return this;
};

Counter.create = function (start) {
  return new Counter(start);
};

Object.defineProperty(Counter, "value", {
  get: function () {
    return this.count;
  },
  set: function (v) {
    this.count = v;
  },
});

exports.Counter = Counter;
"""

FULL_EXPECTED = """\
// Counts things.
class Counter {
  constructor(start) {
    this.count = start;
    this.step = 1;
  }

  increment() {
    this.count += this.step;
    return this;
  }

  static create(start) {
    return new Counter(start);
  }

  get value() {
    return this.count;
  }

  set value(v) {
    this.count = v;
  }
}

exports.Counter = Counter;
"""


class TestClassSynthesis:
    def test_constructor_function_becomes_class(self):
        assert convert_source(CONSTRUCTOR_SOURCE) == (
            "class Foo {\n  constructor(a) {\n    this.a = a;\n  }\n}\n"
        )

    def test_lowercase_function_unchanged(self):
        source = "function foo(a) {\n  return a;\n}\n"
        assert convert_source(source) == source

    def test_empty_constructor(self):
        assert convert_source("function Foo() {}\n") == (
            "class Foo {\n  constructor() {}\n}\n"
        )

    def test_export_wrapper_kept(self):
        assert convert_source("export function Foo() {}\n") == (
            "export class Foo {\n  constructor() {}\n}\n"
        )

    def test_nested_declaration_indentation(self):
        source = "if (ok) {\n  function Foo() {\n    this.a = 1;\n  }\n}\n"
        assert convert_source(source) == (
            "if (ok) {\n"
            "  class Foo {\n"
            "    constructor() {\n"
            "      this.a = 1;\n"
            "    }\n"
            "  }\n"
            "}\n"
        )

    def test_indent_width_config(self):
        output = convert_source("function Foo() {}\n", TransformConfig(indent_width=4))
        assert output == "class Foo {\n    constructor() {}\n}\n"

    def test_tab_indent_config(self):
        output = convert_source("function Foo() {}\n", TransformConfig(use_tabs=True))
        assert output == "class Foo {\n\tconstructor() {}\n}\n"

    def test_invalid_indent_width(self):
        with pytest.raises(ValueError):
            TransformConfig(indent_width=0)


class TestMerging:
    def test_field_literal_appended_to_constructor(self):
        source = CONSTRUCTOR_SOURCE + "Foo.prototype.bar = 5;\n"
        assert convert_source(source) == (
            "class Foo {\n"
            "  constructor(a) {\n"
            "    this.a = a;\n"
            "    this.bar = 5;\n"
            "  }\n"
            "}\n"
        )

    def test_field_into_single_line_body(self):
        source = "function Foo(a) { this.a = a; }\nFoo.prototype.bar = null;\n"
        assert convert_source(source) == (
            "class Foo {\n"
            "  constructor(a) {\n"
            "    this.a = a;\n"
            "    this.bar = null;\n"
            "  }\n"
            "}\n"
        )

    def test_instance_method(self):
        source = "function Foo() {}\nFoo.prototype.baz = function(x){ return x*2; };\n"
        assert convert_source(source) == (
            "class Foo {\n  constructor() {}\n\n  baz(x){ return x*2; }\n}\n"
        )

    def test_static_method(self):
        source = "function Foo() {}\nFoo.qux = function(){ return 1; };\n"
        assert convert_source(source) == (
            "class Foo {\n  constructor() {}\n\n  static qux(){ return 1; }\n}\n"
        )

    def test_exports_assignment_never_becomes_member(self):
        source = "function exports() {}\nexports.qux = function(){};\n"
        output = convert_source(source)
        assert "exports.qux = function(){};" in output
        assert "qux()" not in output

    def test_accessors_in_descriptor_order(self):
        source = (
            "function Foo() {}\n"
            'Object.defineProperty(Foo, "size", { get: function(){ return this._size; },'
            " set: function(v){ this._size = v; } });\n"
        )
        assert convert_source(source) == (
            "class Foo {\n"
            "  constructor() {}\n\n"
            "  get size(){ return this._size; }\n\n"
            "  set size(v){ this._size = v; }\n"
            "}\n"
        )

    def test_quoted_accessor_name(self):
        source = (
            "function Foo() {}\n"
            'Object.defineProperty(Foo.prototype, "my-prop", { get: function () { return 1; } });\n'
        )
        assert '  get "my-prop"() { return 1; }' in convert_source(source)

    def test_multiline_method_reindented(self):
        source = (
            "function Foo() {}\n"
            "Foo.prototype.m = function (x) {\n"
            "  if (x) {\n"
            "    return 1;\n"
            "  }\n"
            "  return 2;\n"
            "};\n"
        )
        assert convert_source(source) == (
            "class Foo {\n"
            "  constructor() {}\n\n"
            "  m(x) {\n"
            "    if (x) {\n"
            "      return 1;\n"
            "    }\n"
            "    return 2;\n"
            "  }\n"
            "}\n"
        )

    def test_class_nested_in_moved_method(self):
        source = (
            "function Foo() {}\n"
            "Foo.prototype.make = function () {\n"
            "  function Inner() {}\n"
            "  return new Inner();\n"
            "};\n"
        )
        assert convert_source(source) == (
            "class Foo {\n"
            "  constructor() {}\n\n"
            "  make() {\n"
            "    class Inner {\n"
            "      constructor() {}\n"
            "    }\n"
            "    return new Inner();\n"
            "  }\n"
            "}\n"
        )

    def test_assignments_before_declaration_still_resolve(self):
        source = "Foo.prototype.a = 1;\nfunction Foo() {}\n"
        assert convert_source(source) == (
            "class Foo {\n  constructor() {\n    this.a = 1;\n  }\n}\n"
        )

    def test_full_example(self):
        assert convert_source(FULL_SOURCE) == FULL_EXPECTED


class TestLayoutPreservation:
    def test_braceless_if_body_keeps_following_code(self):
        source = (
            "function Foo() {}\n"
            "if (debug) Foo.prototype.log = function () {};\n"
            "run();\n"
        )
        assert convert_source(source) == (
            "class Foo {\n  constructor() {}\n\n  log() {}\n}\n"
            "if (debug) {}\n"
            "run();\n"
        )

    def test_braceless_if_with_else_still_parses(self):
        source = "function Foo() {}\nif (c) Foo.prototype.a = 1; else b();\n"
        output = convert_source(source)
        assert output == (
            "class Foo {\n  constructor() {\n    this.a = 1;\n  }\n}\n"
            "if (c) {} else b();\n"
        )
        assert not parse_source(output).root.has_error

    def test_template_literal_lines_not_reindented(self):
        source = (
            "function Foo() {}\n"
            "Foo.prototype.m = function () {\n"
            "  return `a\n"
            "  b`;\n"
            "};\n"
        )
        assert convert_source(source) == (
            "class Foo {\n"
            "  constructor() {}\n\n"
            "  m() {\n"
            "    return `a\n"
            "  b`;\n"
            "  }\n"
            "}\n"
        )

    def test_crlf_line_endings_preserved(self):
        source = "function Foo() {\r\n  this.a = 1;\r\n}\r\nFoo.prototype.b = 2;\r\n"
        assert convert_source(source) == (
            "class Foo {\r\n"
            "  constructor() {\r\n"
            "    this.a = 1;\r\n"
            "    this.b = 2;\r\n"
            "  }\r\n"
            "}\r\n"
        )

    def test_crlf_members_separated_by_crlf(self):
        source = "function Foo() {}\r\nFoo.prototype.m = function () {};\r\n"
        output = convert_source(source)
        assert output == (
            "class Foo {\r\n  constructor() {}\r\n\r\n  m() {}\r\n}\r\n"
        )
        assert "\n" not in output.replace("\r\n", "")


class TestUnresolvedReferences:
    def test_unrelated_matches_still_transformed(self):
        source = (
            "Ghost.prototype.a = 1;\n"
            "Ghost.prototype.m = function () {};\n"
            "function Foo() {}\n"
            "Foo.prototype.b = 2;\n"
        )
        result = transform_source(source)
        assert result.output == (
            "Ghost.prototype.a = 1;\n"
            "Ghost.prototype.m = function () {};\n"
            "class Foo {\n  constructor() {\n    this.b = 2;\n  }\n}\n"
        )
        assert {d.class_name for d in result.warnings} == {"Ghost"}

    def test_method_enclosing_its_own_class_is_kept(self):
        source = "Foo.prototype.m = function () {\n  function Foo() {}\n};\n"
        result = transform_source(source)
        assert result.output == (
            "Foo.prototype.m = function () {\n"
            "  class Foo {\n"
            "    constructor() {}\n"
            "  }\n"
            "};\n"
        )
        assert [d.member_name for d in result.warnings] == ["m"]

    def test_accessor_for_missing_class_reported_as_error(self):
        source = 'Object.defineProperty(Ghost, "x", { get: function () {} });\n'
        result = transform_source(source)
        assert result.output == source
        assert [d.class_name for d in result.errors] == ["Ghost"]


class TestTransformSource:
    def test_returns_transform_result(self):
        result = transform_source(FULL_SOURCE)
        assert isinstance(result, TransformResult)
        assert result.changed
        assert result.stats.classes_created == 1
        assert result.stats.fields_merged == 1
        assert result.stats.methods_attached == 1
        assert result.stats.static_methods_attached == 1
        assert result.stats.accessors_created == 2
        assert "Counter" in result.prototype_names

    def test_unchanged_source(self):
        result = transform_source("var x = 1;\n")
        assert not result.changed
        assert result.diagnostics == []

    def test_report_mentions_counts(self):
        report = transform_source(FULL_SOURCE).stats.report()
        assert "Classes created" in report

    def test_syntax_errors_rejected_when_disallowed(self):
        with pytest.raises(UnparseableSourceError):
            transform_source("function (", allow_errors=False)

    def test_parse_source_has_no_edits(self):
        assert parse_source(FULL_SOURCE).edits == []


class TestIdempotence:
    @pytest.mark.parametrize(
        "source",
        [
            FULL_SOURCE,
            CONSTRUCTOR_SOURCE + "Foo.prototype.bar = 5;\n",
            "Ghost.prototype.a = 1;\nfunction Foo() {}\nFoo.x = function () {};\n",
        ],
    )
    def test_second_run_is_noop(self, source):
        once = convert_source(source)
        assert convert_source(once) == once

    def test_stable_ordering_across_runs(self):
        source = (
            "function Foo() {}\n"
            "Foo.prototype.b = function () {};\n"
            "Foo.prototype.a = function () {};\n"
        )
        first = convert_source(source)
        assert first == convert_source(source)
        assert first.index("b()") < first.index("a()")
