"""
Energy domain

Deterministic daily heuristics: energy prediction and calendar, personalised
day schedule, MBTI questionnaire scoring.
"""
