"""Configuração tipada por tipo de bloco.

Cada tipo de bloco tem um modelo pydantic próprio. Os aliases aceitam as
chaves em português gravadas pelo editor (pergunta, opcoes, variavel...)
e strings vazias caem no valor padrão, como o editor espera.
"""

from __future__ import annotations

import re
from typing import Annotated, Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import (
    AliasChoices,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    field_validator,
)

from flow.graph.kinds import NodeKind

DEFAULT_OPTIONS_PROMPT = "Escolha uma opção:"
DEFAULT_COLLECT_PROMPT = "Digite sua resposta:"
DEFAULT_COLLECT_VARIABLE = "dados_coletados"
DEFAULT_END_MESSAGE = "Obrigado pelo contato!"
DEFAULT_TEAM_MESSAGE = "Aguarde, você será atendido por nossa equipe..."
DEFAULT_AGENT_MESSAGE = "Aguarde, você será atendido por um de nossos especialistas..."
DEFAULT_SURVEY_PROMPT = "Qual a sua avaliação?"
DEFAULT_AFFIRMATIVE_LABEL = "Sim"
DEFAULT_NEGATIVE_LABEL = "Não"
STAR_RESPONSE_TYPE = "estrelas"

_HH_MM = re.compile(r"^(\d{1,2}):(\d{2})$")


def _blank_to(default: Any) -> BeforeValidator:
    """Substitui None/string vazia pelo padrão (semântica do `||` do editor)."""

    def _coerce(value: Any) -> Any:
        if value is None:
            return default
        if isinstance(value, str) and not value.strip():
            return default
        return value

    return BeforeValidator(_coerce)


def _optional_id(value: Any) -> str | None:
    """Ids de alvo podem vir numéricos do editor; vazio vira None."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError("id de alvo não pode ser booleano")
    if isinstance(value, (int, str)):
        text = str(value).strip()
        return text or None
    raise ValueError("id de alvo deve ser texto ou número")


def _option_label(value: Any) -> str:
    if isinstance(value, dict):
        for key in ("label", "texto", "text", "valor", "value"):
            if value.get(key) not in (None, ""):
                return str(value[key])
        raise ValueError("opção sem rótulo")
    if isinstance(value, (str, int, float)) and not isinstance(value, bool):
        return str(value)
    raise ValueError("opção deve ser texto")


TargetId = Annotated[str | None, BeforeValidator(_optional_id)]


class NodeConfig(BaseModel):
    """Base imutável; chaves desconhecidas do editor são ignoradas."""

    model_config = ConfigDict(extra="ignore", frozen=True)


class StartConfig(NodeConfig):
    greeting: Annotated[str, _blank_to("")] = Field(
        default="",
        validation_alias=AliasChoices("greeting", "mensagemInicial", "texto"),
    )


class MessageConfig(NodeConfig):
    text: Annotated[str, _blank_to("")] = Field(
        default="",
        validation_alias=AliasChoices("text", "texto", "mensagemInicial"),
    )


class OptionsConfig(NodeConfig):
    prompt: Annotated[str, _blank_to(DEFAULT_OPTIONS_PROMPT)] = Field(
        default=DEFAULT_OPTIONS_PROMPT,
        validation_alias=AliasChoices("prompt", "pergunta"),
    )
    options: Annotated[list[str], _blank_to([])] = Field(
        default_factory=list,
        validation_alias=AliasChoices("options", "opcoes"),
    )

    @field_validator("options", mode="before")
    @classmethod
    def _labels(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [_option_label(item) for item in value]
        return value


class DecisionConfig(NodeConfig):
    prompt: Annotated[str, _blank_to(DEFAULT_OPTIONS_PROMPT)] = Field(
        default=DEFAULT_OPTIONS_PROMPT,
        validation_alias=AliasChoices("prompt", "pergunta"),
    )
    affirmative_label: Annotated[str, _blank_to(DEFAULT_AFFIRMATIVE_LABEL)] = Field(
        default=DEFAULT_AFFIRMATIVE_LABEL,
        validation_alias=AliasChoices("affirmative_label", "opcaoSim"),
    )
    negative_label: Annotated[str, _blank_to(DEFAULT_NEGATIVE_LABEL)] = Field(
        default=DEFAULT_NEGATIVE_LABEL,
        validation_alias=AliasChoices("negative_label", "opcaoNao"),
    )


class CollectDataConfig(NodeConfig):
    prompt: Annotated[str, _blank_to(DEFAULT_COLLECT_PROMPT)] = Field(
        default=DEFAULT_COLLECT_PROMPT,
        validation_alias=AliasChoices("prompt", "pergunta"),
    )
    variable: Annotated[str, _blank_to(DEFAULT_COLLECT_VARIABLE)] = Field(
        default=DEFAULT_COLLECT_VARIABLE,
        validation_alias=AliasChoices("variable", "variavel"),
    )


class EndConfig(NodeConfig):
    message: Annotated[str, _blank_to(DEFAULT_END_MESSAGE)] = Field(
        default=DEFAULT_END_MESSAGE,
        validation_alias=AliasChoices("message", "mensagem"),
    )


class TransferTeamConfig(NodeConfig):
    team_id: TargetId = Field(
        default=None,
        validation_alias=AliasChoices("team_id", "teamId", "departamentoId"),
    )
    team_name: Annotated[str | None, _blank_to(None)] = Field(
        default=None,
        validation_alias=AliasChoices("team_name", "teamNome", "departamentoNome"),
    )
    message: Annotated[str, _blank_to(DEFAULT_TEAM_MESSAGE)] = Field(
        default=DEFAULT_TEAM_MESSAGE,
        validation_alias=AliasChoices("message", "mensagem"),
    )


class TransferAgentConfig(NodeConfig):
    agent_id: TargetId = Field(
        default=None,
        validation_alias=AliasChoices("agent_id", "agenteId"),
    )
    agent_name: Annotated[str | None, _blank_to(None)] = Field(
        default=None,
        validation_alias=AliasChoices("agent_name", "agenteNome"),
    )
    message: Annotated[str, _blank_to(DEFAULT_AGENT_MESSAGE)] = Field(
        default=DEFAULT_AGENT_MESSAGE,
        validation_alias=AliasChoices("message", "mensagem"),
    )


class TimeRange(NodeConfig):
    """Intervalo HH:MM fechado nas duas pontas."""

    start: str = Field(validation_alias=AliasChoices("start", "horaInicio"))
    end: str = Field(validation_alias=AliasChoices("end", "horaFim"))

    @field_validator("start", "end")
    @classmethod
    def _valid_clock(cls, value: str) -> str:
        match = _HH_MM.match(value.strip())
        if match is None:
            raise ValueError(f"horário inválido: {value!r} (esperado HH:MM)")
        hours, minutes = int(match.group(1)), int(match.group(2))
        if hours > 23 or minutes > 59:
            raise ValueError(f"horário fora do intervalo: {value!r}")
        return f"{hours:02d}:{minutes:02d}"

    @property
    def start_minutes(self) -> int:
        return _to_minutes(self.start)

    @property
    def end_minutes(self) -> int:
        return _to_minutes(self.end)


def _to_minutes(clock: str) -> int:
    hours, minutes = clock.split(":")
    return int(hours) * 60 + int(minutes)


def _default_ranges() -> list[TimeRange]:
    return [TimeRange(start="08:00", end="18:00")]


class BusinessHoursConfig(NodeConfig):
    weekdays: dict[str, bool] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("weekdays", "dias"),
    )
    time_ranges: list[TimeRange] = Field(
        default_factory=_default_ranges,
        validation_alias=AliasChoices("time_ranges", "horarios"),
    )
    timezone: Annotated[str | None, _blank_to(None)] = Field(
        default=None,
        validation_alias=AliasChoices("timezone", "fusoHorario"),
    )

    @field_validator("weekdays", mode="before")
    @classmethod
    def _weekday_map(cls, value: Any) -> Any:
        if value is None:
            return {}
        # Lista de dias abertos, ex: ["segunda", "terca"]
        if isinstance(value, list):
            return {str(day).strip().lower(): True for day in value}
        if isinstance(value, dict):
            return {str(day).strip().lower(): flag for day, flag in value.items()}
        return value

    @field_validator("time_ranges", mode="before")
    @classmethod
    def _empty_ranges(cls, value: Any) -> Any:
        if value is None or value == []:
            return _default_ranges()
        return value

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, value: str | None) -> str | None:
        if value is None:
            return None
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"timezone desconhecido: {value!r}") from exc
        return value


class SatisfactionSurveyConfig(NodeConfig):
    prompt: Annotated[str, _blank_to(DEFAULT_SURVEY_PROMPT)] = Field(
        default=DEFAULT_SURVEY_PROMPT,
        validation_alias=AliasChoices("prompt", "pergunta"),
    )
    response_type: Annotated[str, _blank_to(STAR_RESPONSE_TYPE)] = Field(
        default=STAR_RESPONSE_TYPE,
        validation_alias=AliasChoices("response_type", "tipoResposta"),
    )
    variable: Annotated[str | None, _blank_to(None)] = Field(
        default=None,
        validation_alias=AliasChoices("variable", "variavel"),
    )


class UnsupportedConfig(NodeConfig):
    """Blocos de tipo desconhecido: só o texto é aproveitado."""

    text: Annotated[str, _blank_to("")] = Field(
        default="",
        validation_alias=AliasChoices("text", "texto", "mensagemInicial", "mensagem"),
    )


CONFIG_MODELS: dict[NodeKind, type[NodeConfig]] = {
    NodeKind.START: StartConfig,
    NodeKind.MESSAGE: MessageConfig,
    NodeKind.OPTIONS: OptionsConfig,
    NodeKind.DECISION: DecisionConfig,
    NodeKind.COLLECT_DATA: CollectDataConfig,
    NodeKind.END: EndConfig,
    NodeKind.TRANSFER_TEAM: TransferTeamConfig,
    NodeKind.TRANSFER_AGENT: TransferAgentConfig,
    NodeKind.BUSINESS_HOURS: BusinessHoursConfig,
    NodeKind.SATISFACTION_SURVEY: SatisfactionSurveyConfig,
    NodeKind.UNSUPPORTED: UnsupportedConfig,
}


def build_config(kind: NodeKind, raw: dict[str, Any] | None) -> NodeConfig:
    """Valida a configuração bruta para o modelo do tipo.

    Raises:
        pydantic.ValidationError: Valor com tipo ou formato inválido
    """
    model = CONFIG_MODELS[kind]
    return model.model_validate(raw or {})
