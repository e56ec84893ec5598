"""Enrichment, fusion, batching and scoring services"""
