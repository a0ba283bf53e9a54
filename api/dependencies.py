"""
dependencies.py — Dependency injection dla FastAPI.
Każda zależność zwraca odpowiedni adapter z Request.app.state.
"""
from __future__ import annotations

from fastapi import Request

from adapters.domain_sampler.grid_sampler import GridSampler
from adapters.evaluator.float_evaluator import FloatEvaluator
from adapters.expression_parser.descent_parser import DescentExpressionParser
from config import Settings


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_parser(request: Request) -> DescentExpressionParser:
    return request.app.state.parser


def get_evaluator(request: Request) -> FloatEvaluator:
    return request.app.state.evaluator


def get_sampler(request: Request) -> GridSampler:
    return request.app.state.sampler
