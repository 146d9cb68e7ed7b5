"""
Test fixtures for importgraph.

This module provides sample Zig source snippets and the path to a
small sample project used by the builder and CLI tests.
"""

from pathlib import Path

SAMPLE_PROJECT = Path(__file__).parent / "fixtures" / "sample_project"

# Sample content with various import shapes
SINGLE_IMPORT = b'const std = @import("std");\n'

MULTIPLE_IMPORTS = b'''
const std = @import("std");
const rl = @import("raylib");
const Graph = @import("graph/graph.zig").Graph;
'''

DUPLICATE_IMPORTS = b'''
const a = @import("std");
const b = @import("std");
'''

NO_IMPORTS = b'''
pub fn add(a: i32, b: i32) i32 {
    return a + b;
}
'''

# Markers inside comments and strings are still reported
IMPORT_IN_COMMENT = b'''
// const old = @import("legacy.zig");
const usage =
    \\\\const x = @import("doc_example");
;
const std = @import("std");
'''

UNTERMINATED_IMPORT = b'const std = @import("std");\nconst bad = @import("broken'

EMPTY_IMPORT = b'const nothing = @import("");\nconst std = @import("std");\n'

# Expected shape of SAMPLE_PROJECT once built
SAMPLE_NODES = {"main", "graph/graph", "util", "std"}
SAMPLE_IMPORT_COUNTS = {"std": 3, "graph/graph": 2, "util": 1, "main": 0}
