"""HTTP surface of the exporter"""
