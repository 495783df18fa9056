"""
Configuration Management

시스템 설정 관리. 설정은 시작 시 한 번 생성되어 오케스트레이터에 주입된다.
"""

import os
import yaml
from dataclasses import dataclass, field
from typing import Optional, Dict, Any
from pathlib import Path
import logging
from logging.handlers import RotatingFileHandler


SUPPORTED_PROVIDERS = ("openrouter", "openai", "anthropic")
SUPPORTED_LANGUAGES = ("id", "en")

# 공급자별 환경 변수 접두사
_PROVIDER_ENV_PREFIX = {
    "openrouter": "OPENROUTER",
    "openai": "OPENAI",
    "anthropic": "ANTHROPIC",
}


@dataclass(frozen=True)
class GitHubConfig:
    """GitHub API 설정"""
    token: Optional[str] = None
    api_base_url: str = "https://api.github.com"
    timeout_seconds: int = 30


@dataclass(frozen=True)
class ModelConfig:
    """LLM chat-completion 설정"""
    provider: str = "openrouter"
    model: Optional[str] = None
    api_key: Optional[str] = None
    endpoint: Optional[str] = None  # None 이면 공급자 기본 endpoint
    temperature: float = 0.7
    max_tokens: int = 3500
    timeout_seconds: int = 30


@dataclass(frozen=True)
class ServerConfig:
    """HTTP 서버 설정"""
    host: str = "0.0.0.0"
    port: int = 3000
    public_base_url: Optional[str] = None

    @property
    def base_url(self) -> str:
        """리뷰 파일 공개 URL 의 기준 주소"""
        if self.public_base_url:
            return self.public_base_url.rstrip('/')
        return f"http://localhost:{self.port}"


@dataclass(frozen=True)
class ReportConfig:
    """리뷰 리포트 저장/렌더링 설정"""
    output_dir: str = "reviews"
    language: str = "id"


@dataclass(frozen=True)
class LoggingConfig:
    """로깅 설정"""
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file_path: Optional[str] = None
    max_file_size: int = 10 * 1024 * 1024  # 10MB
    backup_count: int = 5


@dataclass(frozen=True)
class AppConfig:
    """전체 애플리케이션 설정"""
    github: GitHubConfig = field(default_factory=GitHubConfig)
    model: ModelConfig = field(default_factory=ModelConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    report: ReportConfig = field(default_factory=ReportConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    debug: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> "AppConfig":
        """환경 변수에서 설정 로드"""
        env = os.environ if environ is None else environ

        provider = env.get("AI_PROVIDER", "openrouter").lower()
        prefix = _PROVIDER_ENV_PREFIX.get(provider, provider.upper())

        return cls(
            github=GitHubConfig(
                token=env.get("GITHUB_TOKEN"),
                api_base_url=env.get("GITHUB_API_URL", "https://api.github.com"),
                timeout_seconds=int(env.get("GITHUB_TIMEOUT", "30")),
            ),
            model=ModelConfig(
                provider=provider,
                model=env.get("AI_MODEL") or env.get(f"{prefix}_MODEL"),
                api_key=env.get("AI_API_KEY") or env.get(f"{prefix}_API_KEY"),
                endpoint=env.get("AI_ENDPOINT") or None,
                temperature=float(env.get("AI_TEMPERATURE", "0.7")),
                max_tokens=int(env.get("AI_MAX_TOKENS", "3500")),
                timeout_seconds=int(env.get("MODEL_TIMEOUT", "30")),
            ),
            server=ServerConfig(
                host=env.get("HOST", "0.0.0.0"),
                port=int(env.get("PORT", "3000")),
                public_base_url=env.get("PUBLIC_BASE_URL") or None,
            ),
            report=ReportConfig(
                output_dir=env.get("REVIEWS_DIR", "reviews"),
                language=env.get("REPORT_LANGUAGE", "id").lower(),
            ),
            logging=LoggingConfig(
                level=env.get("LOG_LEVEL", "INFO"),
                format=env.get("LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
                file_path=env.get("LOG_FILE"),
                max_file_size=int(env.get("LOG_MAX_SIZE", str(10 * 1024 * 1024))),
                backup_count=int(env.get("LOG_BACKUP_COUNT", "5")),
            ),
            debug=env.get("DEBUG", "false").lower() == "true",
        )

    @classmethod
    def from_yaml(cls, config_path: str) -> "AppConfig":
        """YAML 파일에서 설정 로드"""
        config_file = Path(config_path)
        if not config_file.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_file, 'r', encoding='utf-8') as f:
            config_data = yaml.safe_load(f) or {}

        return cls(
            github=GitHubConfig(**config_data.get('github', {})),
            model=ModelConfig(**config_data.get('model', {})),
            server=ServerConfig(**config_data.get('server', {})),
            report=ReportConfig(**config_data.get('report', {})),
            logging=LoggingConfig(**config_data.get('logging', {})),
            debug=config_data.get('debug', False),
        )

    def validate(self) -> None:
        """설정 유효성 검사"""
        errors = []

        # GitHub 토큰 필수 확인
        if not self.github.token:
            errors.append("GitHub token is required")

        if self.model.provider not in SUPPORTED_PROVIDERS:
            errors.append(f"Unsupported AI provider: {self.model.provider}")

        if not self.model.model:
            errors.append("AI model identifier is required")

        if not self.model.api_key:
            errors.append("AI API key is required")

        if self.model.max_tokens <= 0:
            errors.append("max_tokens must be positive")

        if self.github.timeout_seconds <= 0 or self.model.timeout_seconds <= 0:
            errors.append("Timeouts must be positive")

        if not 0 < self.server.port < 65536:
            errors.append(f"Invalid port: {self.server.port}")

        if self.report.language not in SUPPORTED_LANGUAGES:
            errors.append(f"Unsupported report language: {self.report.language}")

        # 로그 레벨 검증
        valid_log_levels = {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}
        if self.logging.level.upper() not in valid_log_levels:
            errors.append(f"Invalid log level: {self.logging.level}")

        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

    def to_dict(self) -> Dict[str, Any]:
        """설정을 딕셔너리로 변환"""
        return {
            'github': {
                'api_base_url': self.github.api_base_url,
                'timeout_seconds': self.github.timeout_seconds,
                # 보안상 토큰은 제외
            },
            'model': {
                'provider': self.model.provider,
                'model': self.model.model,
                'endpoint': self.model.endpoint,
                'temperature': self.model.temperature,
                'max_tokens': self.model.max_tokens,
                'timeout_seconds': self.model.timeout_seconds,
            },
            'server': {
                'host': self.server.host,
                'port': self.server.port,
                'public_base_url': self.server.base_url,
            },
            'report': {
                'output_dir': self.report.output_dir,
                'language': self.report.language,
            },
            'logging': {
                'level': self.logging.level,
                'format': self.logging.format,
                'file_path': self.logging.file_path,
                'max_file_size': self.logging.max_file_size,
                'backup_count': self.logging.backup_count,
            },
            'debug': self.debug,
        }


def setup_logging(config: LoggingConfig) -> None:
    """로깅 설정"""
    logging.basicConfig(
        level=getattr(logging, config.level.upper()),
        format=config.format,
    )

    # 파일 로깅이 설정된 경우 로테이션 설정
    if config.file_path:
        handler = RotatingFileHandler(
            config.file_path,
            maxBytes=config.max_file_size,
            backupCount=config.backup_count,
        )
        handler.setFormatter(logging.Formatter(config.format))

        # 루트 로거에 핸들러 추가
        logging.getLogger().addHandler(handler)


def load_app_config(environ: Optional[Dict[str, str]] = None) -> AppConfig:
    """
    Load configuration from CONFIG_FILE (YAML) or the environment.

    Raises:
        ValueError: Malformed values or an unreadable config file
    """
    env = os.environ if environ is None else environ
    config_file = env.get("CONFIG_FILE")

    try:
        if config_file:
            return AppConfig.from_yaml(config_file)
        return AppConfig.from_env(env)
    except (ValueError, TypeError, OSError, yaml.YAMLError) as e:
        raise ValueError(f"Configuration loading failed: {e}") from e
