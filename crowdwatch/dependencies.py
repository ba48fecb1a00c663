# crowdwatch/dependencies.py
"""
FastAPI dependencies — hand routers the services built once in main.py.
Tests swap them out with app.dependency_overrides.
"""

import random
from fastapi import Request
from crowdwatch.services.crowd_simulator import CrowdSimulator
from crowdwatch.services.media_analyzer import MediaAnalyzer
from crowdwatch.services.query_responder import QueryResponder
from crowdwatch.services.store import StadiumStore


def get_store(request: Request) -> StadiumStore:
    return request.app.state.store


def get_simulator(request: Request) -> CrowdSimulator:
    return request.app.state.simulator


def get_responder(request: Request) -> QueryResponder:
    return request.app.state.responder


def get_analyzer(request: Request) -> MediaAnalyzer:
    return request.app.state.analyzer


def get_rng(request: Request) -> random.Random:
    """Random source for simulated analytics figures."""
    return request.app.state.rng
