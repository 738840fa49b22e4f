from abc import ABC, abstractmethod

from app.domain.entities.onboarding_session import OnboardingSession


class OnboardingSessionStorePort(ABC):
    @abstractmethod
    def get(self, session_id: str) -> OnboardingSession | None:
        raise NotImplementedError

    @abstractmethod
    def put(self, session: OnboardingSession) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete(self, session_id: str) -> None:
        raise NotImplementedError
