"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes.
"""

from fastapi import Request

from src.domain.patterns import PatternValidator
from src.domain.ports import UserRepository
from src.domain.registration import RegistrationService
from src.domain.tokens import TokenService


def get_repository(request: Request) -> UserRepository:
    """
    Get the repository from app state.

    The repository is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.repository


def get_validator(request: Request) -> PatternValidator:
    """Get the pattern validator built from settings at startup."""
    return request.app.state.validator


def get_token_service(request: Request) -> TokenService:
    """Get the token service built from settings at startup."""
    return request.app.state.token_service


def get_registration_service(request: Request) -> RegistrationService:
    """
    Create registration service with injected dependencies.

    Wires together the repository, validator and token service for the domain service.
    """
    return RegistrationService(
        repository=get_repository(request),
        validator=get_validator(request),
        token_service=get_token_service(request),
    )
