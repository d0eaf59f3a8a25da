from datetime import datetime
from pydantic import BaseModel, Field
from typing import List, Dict, Any

class FileStatus(BaseModel):
    path: str
    index: str = " "
    worktree: str = " "

class ChangedFileSet(BaseModel):
    files: List[FileStatus] = []

    @property
    def paths(self) -> List[str]:
        return [f.path for f in self.files]

    def __len__(self) -> int:
        return len(self.files)

    def __bool__(self) -> bool:
        return bool(self.files)

class FileDiff(BaseModel):
    path: str
    diff: str
    truncated: bool = False

class ChangeReport(BaseModel):
    sections: List[FileDiff] = []
    text: str = ""

class ChatMessage(BaseModel):
    role: str
    content: str

class CompletionRequest(BaseModel):
    model: str
    messages: List[ChatMessage]
    max_tokens: int = 1000
    parameters: Dict[str, Any] = {}

class CompletionChoice(BaseModel):
    text: str

class CompletionResponse(BaseModel):
    choices: List[CompletionChoice] = []

class CommitIdentity(BaseModel):
    name: str
    email: str

class CommitRecord(BaseModel):
    hexsha: str
    author_name: str
    author_email: str
    timestamp: datetime

class Proposal(BaseModel):
    files: ChangedFileSet
    report: ChangeReport
    message: str = Field(..., min_length=1)
