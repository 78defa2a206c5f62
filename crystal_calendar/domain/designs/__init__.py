"""Saved jewelry design works"""
