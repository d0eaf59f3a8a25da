from pydantic import BaseModel, Field
from typing import Literal, Optional, Dict, Any

class ModelConfig(BaseModel):
    provider: str = "openai"
    name: str = "gpt-4-turbo"
    api_key: Optional[str] = None
    base_url: Optional[str] = None
    timeout_sec: Optional[float] = Field(None, description="Request timeout in seconds; null waits indefinitely")
    max_tokens: int = Field(1000, gt=0)
    parameters: Dict[str, Any] = Field(default_factory=dict)

class DiffConfig(BaseModel):
    max_size: int = Field(4000, gt=0, description="Maximum number of characters kept per file diff")
    style: Literal["unified", "inline"] = "unified"

class PromptConfig(BaseModel):
    template_dir: Optional[str] = None
    system_template: str = "system.j2"
    user_template: str = "user.j2"

class CommitConfig(BaseModel):
    confirm_token: str = "yes"
    author_name: Optional[str] = Field(None, description="Overrides user.name from git config")
    author_email: Optional[str] = Field(None, description="Overrides user.email from git config")

class LoggingConfig(BaseModel):
    level: str = "INFO"
    file: Optional[str] = "~/.cache/aicommand/aicommand.log"


class Config(BaseModel):
    model: ModelConfig = Field(default_factory=ModelConfig, description="Completion service settings")
    diff: DiffConfig = Field(default_factory=DiffConfig, description="Change report settings")
    prompt: PromptConfig = Field(default_factory=PromptConfig, description="Prompt template settings")
    commit: CommitConfig = Field(default_factory=CommitConfig, description="Commit settings")
    logging: LoggingConfig = Field(default_factory=LoggingConfig, description="Logging settings")
