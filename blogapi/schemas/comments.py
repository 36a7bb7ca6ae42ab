from pydantic import BaseModel


class CommentCreate(BaseModel):
    author_name: str
    comment: str
