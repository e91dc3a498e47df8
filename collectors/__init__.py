"""Metric collectors, one per external source"""
