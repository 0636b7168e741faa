"""storyboard_palette.core — Foundation layer.

Contains the palette, the colour matcher, the node rewriter, the tree walker,
document parsing/serialisation, input discovery, configuration and the report
builder. This module has NO dependencies on storyboard_palette.commands or
storyboard_palette.registry.
Only stdlib, numpy, and lxml are allowed here.
"""
