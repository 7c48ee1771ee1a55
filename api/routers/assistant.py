"""Assistant API Routes."""

from fastapi import APIRouter, Depends

from api.dependencies import get_api_key, get_assistant
from scentvalue.models.assistant import AskRequest, AssistantReply
from scentvalue.services import AssistantBackend

router = APIRouter(dependencies=[Depends(get_api_key)])


@router.post("/ask", response_model=AssistantReply)
async def ask(
    request: AskRequest,
    assistant: AssistantBackend = Depends(get_assistant),
):
    """
    Ask the fragrance assistant a question.

    Always returns 200; if the AI service is unreachable the answer is a
    fixed apology message.
    """
    answer = await assistant.ask(request.query)
    return AssistantReply(query=request.query, answer=answer)
