"""모델 패키지 — 레포지토리가 다루는 엔티티 공통 정의.

Models package — Shared entity definitions for repository-managed records.
"""

from generic_repository.models.entity import Entity, EntityMixin

__all__ = ["Entity", "EntityMixin"]
