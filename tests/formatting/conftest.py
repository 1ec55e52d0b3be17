"""Test configuration and fixtures for formatting tests."""

import pytest


# Sample sources, one per family, already free of 3+ blank-line runs
JAVASCRIPT_FLAT = '''function f() {
if (x) {
doThing();
}
}'''

JAVASCRIPT_INDENTED = '''function add(a,b) {
  // sum two values

  return a+b;
}

const items = [1,2,3];'''

JSON_DOCUMENT = '{"a":1,"b":[1,2]}'

PYTHON_MODULE = '''import os


def foo(a,b=1,*args,**kwargs):
    # doc
    if a==b :
        return -a
    return {'a':1}
'''

C_PROGRAM = '''#include <stdio.h>
int main(){
printf("hi\\n");
return 0;
}'''

JAVA_CLASS = '''public class Greeter {
public String greet(String name) {
return "Hello, " + name;
}
}'''

CSS_STYLESHEET = '''a {
  color:red;
}
/* second rule */
b {
  margin:0;
}'''

HTML_PAGE = '''<ul   class = "menu">
  <li>One</li>
</ul>'''


TYPESCRIPT_MODULE = '''interface Point {
  x:number;
  y?: number;
}

function total(items: Array<Point>): number {
  let sum=0;
  for (const p of items) {
    sum += p.x;
  }
  return sum;
}'''

CPP_PROGRAM = '''#include <vector>

struct Node {
int value;
};

int total(const std::vector<Node> items) {
int sum=0;
for (auto it = items.begin(); it != items.end(); ++it) {
sum += it -> value;
}
return sum;
}'''


@pytest.fixture
def javascript_flat():
    """Unindented JavaScript, re-indented by brace depth."""
    return JAVASCRIPT_FLAT


@pytest.fixture
def javascript_indented():
    return JAVASCRIPT_INDENTED


@pytest.fixture
def python_module():
    """Python source with four-space indentation."""
    return PYTHON_MODULE


@pytest.fixture
def c_program():
    return C_PROGRAM


@pytest.fixture
def java_class():
    return JAVA_CLASS


@pytest.fixture
def typescript_module():
    """Type annotations, an optional member and a generic argument list."""
    return TYPESCRIPT_MODULE


@pytest.fixture
def cpp_program():
    return CPP_PROGRAM


@pytest.fixture
def css_stylesheet():
    """Two rule blocks, the second preceded by a comment."""
    return CSS_STYLESHEET


@pytest.fixture
def html_page():
    return HTML_PAGE


# (language id, source, indent unit matching the family's ratio width)
SAMPLES = [
    ("javascript", JAVASCRIPT_FLAT, "  "),
    ("javascript", JAVASCRIPT_INDENTED, "  "),
    ("json", JSON_DOCUMENT, "  "),
    ("python", PYTHON_MODULE, "    "),
    ("c", C_PROGRAM, "    "),
    ("typescript", TYPESCRIPT_MODULE, "  "),
    ("java", JAVA_CLASS, "  "),
    ("cpp", CPP_PROGRAM, "    "),
    ("css", CSS_STYLESHEET, "  "),
    ("html", HTML_PAGE, "  "),
]


@pytest.fixture(params=SAMPLES, ids=[f"{lang}-{i}" for i, (lang, _, _) in enumerate(SAMPLES)])
def sample(request):
    """Every sample as a (language_id, source, indent_unit) triple."""
    return request.param
