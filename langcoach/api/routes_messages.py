from fastapi import APIRouter, HTTPException
from langcoach.models.feedback import Message
from langcoach.utils.storage import MessageStore, StorageError

router = APIRouter(prefix="/messages", tags=["messages"])

@router.post("")
def store_message(message: Message):
    try:
        return MessageStore().save(message).model_dump()
    except StorageError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.get("/{message_id}")
def read_message(message_id: str):
    try:
        message = MessageStore().get(message_id)
    except StorageError:
        message = None
    if message is None:
        raise HTTPException(status_code=404, detail="Message not found")
    return message.model_dump()
