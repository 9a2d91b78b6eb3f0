"""레포지토리 예외 클래스 모듈.

Repository exception classes module.
Provides pre-configured exception classes for the error cases of the
generic repository and its persistence context. Each class carries a
default detail message so call sites only pass one when it adds information.

Usage:
    from generic_repository.utils.exceptions import NullInputError
    raise NullInputError("Attempt to add a null record")
"""

from dataclasses import dataclass
from typing import Any


class RepositoryError(Exception):
    """레포지토리 계층의 기본 예외.

    Base exception for all errors raised by the repository layer.

    Args:
        detail: 오류 메시지 (Error message)
    """

    def __init__(self, detail: str = "Repository error") -> None:
        super().__init__(detail)
        self.detail: str = detail


class NullInputError(RepositoryError):
    """None 엔티티가 전달되었을 때 사용.

    Raised when add/update receives ``None`` instead of an entity.
    Propagated to the caller, never retried.

    Args:
        detail: 오류 메시지 (Error message, default: "Attempt to use a null record")
    """

    def __init__(self, detail: str = "Attempt to use a null record") -> None:
        super().__init__(detail)


@dataclass(frozen=True)
class ValidationErrorDetail:
    """단일 필드 검증 실패 정보.

    One field-level validation failure reported by the persistence context.

    Attributes:
        entity: 검증에 실패한 엔티티 (Entity that failed validation)
        property_name: 실패한 속성 이름 (Name of the failing attribute)
        error_message: 실패 사유 (Why the value was rejected)
    """

    entity: Any
    property_name: str
    error_message: str


class EntityValidationError(RepositoryError):
    """커밋 시 필드 제약 조건 위반 — 퍼시스턴스 컨텍스트가 발생시킴.

    Raised by the persistence context on commit when field-level
    constraints fail. Carries every failure found in the pending changes.

    Args:
        errors: 검증 실패 목록 (Collected validation failures)
        detail: 오류 메시지 (Error message, default: "Validation failed for one or more entities")
    """

    def __init__(
        self,
        errors: list[ValidationErrorDetail],
        detail: str = "Validation failed for one or more entities",
    ) -> None:
        super().__init__(detail)
        self.errors: list[ValidationErrorDetail] = errors


class ValidationFailureError(RepositoryError):
    """검증 실패를 하나의 설명 메시지로 집계한 예외.

    Raised by the repository when the context reports validation errors.
    The individual failures are aggregated into a single descriptive message,
    one ``Property: <name> Error: <message>`` line per failure.

    Args:
        errors: 검증 실패 목록 (Validation failures being aggregated)
    """

    def __init__(self, errors: list[ValidationErrorDetail]) -> None:
        detail = "\n".join(
            f"Property: {error.property_name} Error: {error.error_message}"
            for error in errors
        )
        super().__init__(detail or "Validation failed")
        self.errors: list[ValidationErrorDetail] = errors
