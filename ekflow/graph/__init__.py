"""Network primitives and helpers.

This package provides the integer-indexed residual network type `FlowNetwork`
and a conversion module (`convert`) for NetworkX interop.
"""
