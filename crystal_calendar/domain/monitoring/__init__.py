"""Monitoring: in-process collector, report upload and client report ingestion"""
