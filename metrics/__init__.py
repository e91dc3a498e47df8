"""Metric models, descriptors, mapping and the collector registry"""
