"""
Deterministic calculation engine.

Pure Python math. No I/O, no shared state.
Shorthand codecs per part type, the volume formula evaluator,
and the dated price timeline resolver.
"""
