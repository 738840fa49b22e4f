from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse

from app.api.v1.schemas import (
    MenuSetupRequestSchema,
    RestaurantInfoRequestSchema,
    SessionRequestSchema,
    ThemeRequestSchema,
    sub_document,
)
from app.application.exceptions import SessionNotFoundError, StepsIncompleteError
from app.application.use_cases.onboarding_service import OnboardingService
from app.domain.entities.onboarding_session import OnboardingSession
from app.wiring.dependencies import get_onboarding_service

router = APIRouter()


def envelope(data: Any, message: str = "Success", status_code: int = 200) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": True, "statusCode": status_code, "message": message, "data": data},
    )


def _progress(session: OnboardingSession) -> dict[str, Any]:
    return {
        "sessionId": session.session_id,
        "currentStep": session.current_step.value,
        "completedSteps": [s.value for s in session.completed_steps],
    }


@router.post("/start", status_code=201)
def start(svc: OnboardingService = Depends(get_onboarding_service)):
    session = svc.start()
    return envelope(_progress(session), "Onboarding session started", status_code=201)


@router.get("/status/{session_id}")
def status(session_id: str, svc: OnboardingService = Depends(get_onboarding_service)):
    try:
        session = svc.get_status(session_id)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return envelope(session.to_payload())


@router.post("/restaurant-info")
def save_restaurant_info(
    req: RestaurantInfoRequestSchema,
    svc: OnboardingService = Depends(get_onboarding_service),
):
    try:
        session = svc.save_restaurant_info(req.session_id, sub_document(req))
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return envelope({**_progress(session), "restaurantInfo": session.restaurant_info}, "Restaurant information saved")


@router.post("/menu-setup")
def save_menu_setup(
    req: MenuSetupRequestSchema,
    svc: OnboardingService = Depends(get_onboarding_service),
):
    try:
        session = svc.save_menu_setup(req.session_id, sub_document(req))
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return envelope({**_progress(session), "menuSetup": session.menu_setup}, "Menu setup saved")


@router.post("/theme")
def save_theme(
    req: ThemeRequestSchema,
    svc: OnboardingService = Depends(get_onboarding_service),
):
    try:
        session = svc.save_theme(req.session_id, sub_document(req))
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return envelope({**_progress(session), "themeSettings": session.theme_settings}, "Theme settings saved")


@router.post("/complete")
def complete(
    req: SessionRequestSchema,
    svc: OnboardingService = Depends(get_onboarding_service),
):
    try:
        session = svc.complete(req.session_id)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StepsIncompleteError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return envelope(
        {
            "sessionId": session.session_id,
            "isCompleted": session.is_completed,
            "completedSteps": [s.value for s in session.completed_steps],
            "data": {
                "restaurantInfo": session.restaurant_info,
                "menuSetup": session.menu_setup,
                "themeSettings": session.theme_settings,
            },
        },
        "Onboarding completed successfully!",
    )
