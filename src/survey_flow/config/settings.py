"""Configurações da aplicação via variáveis de ambiente.

Todas as configurações são carregadas de env vars.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# -----------------------------------------------------------------------------
# Endereços padrão de bind
# Local: 127.0.0.1:7878 — Fly.io (FLY_APP_NAME presente): 0.0.0.0:8080
# -----------------------------------------------------------------------------
LOCAL_BIND_HOST: str = "127.0.0.1"
LOCAL_BIND_PORT: int = 7878
FLY_BIND_HOST: str = "0.0.0.0"  # noqa: S104
FLY_BIND_PORT: int = 8080

_PACKAGE_DIR = Path(__file__).resolve().parent.parent
_DEFAULT_TEMPLATES_DIR = _PACKAGE_DIR / "templates"


class Settings(BaseSettings):
    """Configurações do servidor do questionário.

    Bind (local ou Fly.io), diretórios de páginas, log CSV de sessões
    finalizadas, cookie de sessão e teto de requests simultâneos.
    """

    model_config = SettingsConfigDict(
        env_prefix="",
        case_sensitive=False,
    )

    # Aplicação
    service_name: str = "survey_flow"
    version: str = "0.1.0"
    environment: str = "development"
    log_level: str = "INFO"

    # Rede (HOST/PORT sobrescrevem a detecção por FLY_APP_NAME)
    host: str | None = None
    port: int | None = None
    fly_app_name: str | None = None  # Presente apenas em deploy Fly.io

    # Páginas e assets
    pages_dir: Path = _DEFAULT_TEMPLATES_DIR  # page1.html .. page9.html, 404.html
    static_dir: Path = _DEFAULT_TEMPLATES_DIR  # /lib/* é servido de static_dir/lib

    # Log CSV de sessões finalizadas
    survey_log_path: Path = Path("/data/data.csv")
    survey_log_require_existing: bool = True  # Sem volume montado: não grava

    # Sessão
    session_cookie_name: str = "session_id"

    # Controle de admissão (requests simultâneos)
    max_concurrent_requests: int = 64

    @property
    def bind_host(self) -> str:
        """Host efetivo de bind."""
        if self.host:
            return self.host
        return FLY_BIND_HOST if self.fly_app_name else LOCAL_BIND_HOST

    @property
    def bind_port(self) -> int:
        """Porta efetiva de bind."""
        if self.port is not None:
            return self.port
        return FLY_BIND_PORT if self.fly_app_name else LOCAL_BIND_PORT

    @property
    def is_production(self) -> bool:
        """True se ambiente de produção."""
        return self.environment.lower() == "production"

    def validate_survey_log_config(self) -> list[str]:
        """Valida configuração do log CSV.

        Retorna lista de erros (vazia se válido).
        """
        errors: list[str] = []
        if not str(self.survey_log_path).strip():
            errors.append("SURVEY_LOG_PATH não pode ser vazio")
        elif self.survey_log_path.suffix.lower() != ".csv":
            errors.append(
                f"SURVEY_LOG_PATH deve apontar para um arquivo .csv "
                f"(recebido: {self.survey_log_path})"
            )

        # Em produção o CSV precisa existir no volume montado
        if self.is_production and not self.survey_log_require_existing:
            errors.append(
                "SURVEY_LOG_REQUIRE_EXISTING=false é proibido em produção. "
                "Monte o volume e crie o arquivo CSV antes do deploy."
            )
        return errors

    def validate_admission_config(self) -> list[str]:
        """Valida teto de requests simultâneos e porta."""
        errors: list[str] = []
        if self.max_concurrent_requests < 1:
            errors.append("MAX_CONCURRENT_REQUESTS deve ser >= 1")
        if self.port is not None and not (0 < self.port < 65536):
            errors.append(f"PORT fora do intervalo válido: {self.port}")
        if not self.session_cookie_name.strip():
            errors.append("SESSION_COOKIE_NAME não pode ser vazio")
        return errors


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Retorna uma instância cacheada de Settings.

    A cache garante que mesmo múltiplas injeções não criam novos objetos.
    """
    return Settings()
