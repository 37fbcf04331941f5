"""Shared fixtures."""

from __future__ import annotations

import pytest

CLEAN_SOURCE = "\n".join(
    [
        "// Sample module",
        "",
        "#include <stdio.h>",
        "",
        "#define MAX_SIZE 10",
        "",
        "int add(",
        "  int a,",
        "  int b) {",
        "",
        "  int sum = a + b;",
        "  return sum;",
        "",
        "}",
        "",
        "int main(void) {",
        "",
        "  int total = add(",
        "    1,",
        "    2);",
        "  switch (total) {",
        "",
        "    case 3:",
        '      printf("three\\n");',
        "      break;",
        "",
        "    default:",
        "      break;",
        "",
        "  }",
        "",
        "  return 0;",
        "",
        "}",
        "",
    ]
)


@pytest.fixture
def clean_source_text() -> str:
    """A body file that passes every rule."""
    return CLEAN_SOURCE
