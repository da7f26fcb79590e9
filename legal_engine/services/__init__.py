"""
Services package for the legal engine.

Pipeline stages (preprocessing, segmentation, classification, issue
detection, risk aggregation) and the template registry and compiler.
"""
