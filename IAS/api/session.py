from fastapi import APIRouter, Depends, HTTPException, status

from IAS.api.dependencies import get_session_service
from IAS.api.mapper import SessionMapper
from IAS.api.schemas import (
    AnswerSubmitRequest,
    DraftRequest,
    NextQuestionResponse,
    SessionCreateRequest,
    SessionResponse,
    SessionStatsResponse,
    StartSessionResponse,
    StatusChangeResponse,
    SubmitAnswerResponse,
)
from packages.ias_core.errors import (
    FinalizedSessionError,
    GenerationFailure,
    IASBaseError,
    ResultsNotReadyError,
    SessionBusyError,
    SessionNotActiveError,
    SessionNotFoundError,
    StaleSubmissionError,
    ValidationError,
)
from packages.ias_report.dto import ResultsBundle
from packages.ias_service.session_service import InterviewSessionService

router = APIRouter(prefix="/sessions", tags=["Session"])

_STATUS_BY_ERROR = {
    ValidationError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    SessionNotFoundError: status.HTTP_404_NOT_FOUND,
    FinalizedSessionError: status.HTTP_409_CONFLICT,
    SessionNotActiveError: status.HTTP_409_CONFLICT,
    StaleSubmissionError: status.HTTP_409_CONFLICT,
    ResultsNotReadyError: status.HTTP_409_CONFLICT,
    SessionBusyError: status.HTTP_423_LOCKED,
    GenerationFailure: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def _to_http(e: IASBaseError) -> HTTPException:
    code = _STATUS_BY_ERROR.get(type(e), status.HTTP_400_BAD_REQUEST)
    return HTTPException(
        status_code=code,
        detail={"code": e.code, "message": e.message, "details": e.details}
    )


@router.post("", response_model=StartSessionResponse, status_code=status.HTTP_201_CREATED)
def create_session(
    request: SessionCreateRequest,
    service: InterviewSessionService = Depends(get_session_service)
):
    """
    Start a new interview session and deliver its first question.
    """
    try:
        result = service.start(request.model_dump())
        return StartSessionResponse(
            session=SessionMapper.session(result.session, service.time_remaining(result.session.id)),
            first_question=SessionMapper.question(result.first_question)
        )
    except IASBaseError as e:
        raise _to_http(e)


@router.get("/stats", response_model=SessionStatsResponse)
def get_stats(service: InterviewSessionService = Depends(get_session_service)):
    """
    Live session counts by status.
    """
    return SessionStatsResponse(**service.stats())


@router.get("/{session_id}", response_model=SessionResponse)
def get_session(
    session_id: str,
    service: InterviewSessionService = Depends(get_session_service)
):
    """
    Get current session status. Read-only.
    """
    try:
        return SessionMapper.session(service.get_session(session_id), service.time_remaining(session_id))
    except IASBaseError as e:
        raise _to_http(e)


@router.post("/{session_id}/next", response_model=NextQuestionResponse)
def next_question(
    session_id: str,
    service: InterviewSessionService = Depends(get_session_service)
):
    """
    Deliver the next question, or the pending one if it is still unanswered.
    """
    try:
        question = service.next_question(session_id)
        return NextQuestionResponse(
            question=SessionMapper.question(question),
            no_more_questions=question is None
        )
    except IASBaseError as e:
        raise _to_http(e)


@router.post("/{session_id}/answers", response_model=SubmitAnswerResponse)
def submit_answer(
    session_id: str,
    answer: AnswerSubmitRequest,
    service: InterviewSessionService = Depends(get_session_service)
):
    """
    Submit an answer for the current question.
    Delegates to Service Layer for Concurrency Control and Logic.
    """
    try:
        result = service.submit_answer(
            session_id, answer.answer, answer.time_spent, question_id=answer.question_id
        )
        return SessionMapper.submission(result)
    except IASBaseError as e:
        raise _to_http(e)


@router.put("/{session_id}/draft", status_code=status.HTTP_204_NO_CONTENT)
def save_draft(
    session_id: str,
    draft: DraftRequest,
    service: InterviewSessionService = Depends(get_session_service)
):
    """
    Store the in-progress answer; it is auto-submitted when the timer runs out.
    """
    try:
        service.save_draft(session_id, draft.text, question_id=draft.question_id)
    except IASBaseError as e:
        raise _to_http(e)


@router.post("/{session_id}/pause", response_model=StatusChangeResponse)
def pause_session(
    session_id: str,
    service: InterviewSessionService = Depends(get_session_service)
):
    try:
        changed = service.pause(session_id)
        return StatusChangeResponse(
            session_id=session_id,
            status=service.get_session(session_id).status.value,
            changed=changed
        )
    except IASBaseError as e:
        raise _to_http(e)


@router.post("/{session_id}/resume", response_model=StatusChangeResponse)
def resume_session(
    session_id: str,
    service: InterviewSessionService = Depends(get_session_service)
):
    try:
        changed = service.resume(session_id)
        return StatusChangeResponse(
            session_id=session_id,
            status=service.get_session(session_id).status.value,
            changed=changed
        )
    except IASBaseError as e:
        raise _to_http(e)


@router.get("/{session_id}/results", response_model=ResultsBundle)
def get_results(
    session_id: str,
    service: InterviewSessionService = Depends(get_session_service)
):
    """
    Final results bundle. Only available once the session is completed.
    """
    try:
        return service.results(session_id)
    except IASBaseError as e:
        raise _to_http(e)


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_session(
    session_id: str,
    service: InterviewSessionService = Depends(get_session_service)
):
    if not service.delete_session(session_id):
        raise _to_http(SessionNotFoundError(session_id))
