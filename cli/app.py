"""
cli/app.py - 메인 CLI 엔트리포인트

Click 기반의 CLI 애플리케이션 진입점입니다.
플러그인 discovery로 찾은 리소스 종류마다 검색 명령어를 자동 등록합니다.

명령어 구조:
    awss --version                          # 버전 표시
    awss [전역 옵션] <resource> [필터] [--sort KEY]

    예시:
    awss instances --names 'web-*'
    awss --profiles dev,prod --regions all instances -t Env=prod
    awss -o json network-interfaces -p 10.0.1.15

설정 우선순위 (낮음 -> 높음):
    기본값 < ~/.awss/config.yaml (또는 -c) < AWSS_* 환경 변수 < CLI 플래그

종료 코드:
    0: 검색 완료 (개별 (프로파일, 리전) 실패는 결과에만 기록)
    1: 설정/입력 검증 실패, 인증 프로브 실패
    130: 사용자 중단 (Ctrl+C)

Usage:
    $ awss instances -n 'web-*'
    $ python -m cli.app instances -n 'web-*'
"""

import logging
import sys
from pathlib import Path
from typing import NoReturn

# 프로젝트 루트를 sys.path에 추가 (plugins 모듈 임포트를 위함)
_project_root = Path(__file__).resolve().parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

import click  # noqa: E402
from click import Context  # noqa: E402

from cli.i18n import t  # noqa: E402
from core.config import (  # noqa: E402
    LOG_LEVELS,
    AppConfig,
    LogConfig,
    get_version,
    load_app_config,
    settings,
    setup_logging,
    split_values,
)
from core.exceptions import AwssError  # noqa: E402
from core.search.filters import FilterField, FilterSet  # noqa: E402
from core.search.registry import ResourceKind, get_registry  # noqa: E402
from core.search.render import RenderOptions, valid_outputs  # noqa: E402

logger = logging.getLogger(__name__)

VERSION = get_version()


def _fail(error: Exception, exit_code: int = 1) -> NoReturn:
    """오류를 stderr에 출력하고 종료"""
    click.echo(f"{t('cli.error_prefix')}: {error}", err=True)
    raise SystemExit(exit_code)


def _build_help_text() -> str:
    """help 텍스트 생성"""
    lines = [
        "awss - AWS Search CLI",
        "",
        t("cli.help_intro"),
        "",
        "\b",  # Click 줄바꿈 유지 마커
        t("cli.help_examples"),
        "  awss instances --names 'web-*' --sort az",
        "  awss --profiles all --regions all instances -t Env=prod,staging",
        "  awss -o json-pretty network-interfaces --private-ips 10.0.1.15",
    ]
    return "\n".join(lines)


@click.group()
@click.version_option(VERSION, prog_name="awss")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help=f"Config file (default: ~/{settings.CONFIG_DIR_NAME}/{settings.CONFIG_FILE_NAME})",
)
@click.option("--profiles", multiple=True, help="AWS profiles, comma separated or repeated ('all' for every profile)")
@click.option("--regions", multiple=True, help="AWS regions, comma separated or repeated ('all' for every region)")
@click.option("-o", "--output", type=click.Choice(valid_outputs()), default=None, help="Output format")
@click.option("--show-empty/--hide-empty", default=None, help="Print (profile, region) pairs with no results")
@click.option("--show-tags/--hide-tags", default=None, help="Show the Tags column in table output")
@click.option(
    "--max-workers",
    type=click.IntRange(1, settings.MAX_WORKERS_LIMIT),
    default=None,
    help="Maximum concurrent (profile, region) searches",
)
@click.option("--timeout", type=click.IntRange(min=1), default=None, help="Overall search deadline in seconds")
@click.option("--log-level", type=click.Choice(LOG_LEVELS, case_sensitive=False), default=None, help="Log level")
@click.option(
    "--lang",
    type=click.Choice(["en", "ko"]),
    default="en",
    help="UI language / UI 언어 설정 (en: English, ko: 한국어)",
)
@click.pass_context
def cli(
    ctx: Context,
    config_path: str | None,
    profiles: tuple[str, ...],
    regions: tuple[str, ...],
    output: str | None,
    show_empty: bool | None,
    show_tags: bool | None,
    max_workers: int | None,
    timeout: int | None,
    log_level: str | None,
    lang: str,
) -> None:
    """awss - AWS Search CLI"""
    from cli.i18n import set_lang

    set_lang(lang)

    try:
        config = load_app_config(config_path).merge(
            profiles=split_values(profiles),
            regions=split_values(regions),
            output=output,
            show_empty=show_empty,
            show_tags=show_tags,
            max_workers=max_workers,
            timeout=timeout,
            log_level=log_level.lower() if log_level else None,
        )
        setup_logging(config.log_level, LogConfig.from_env())
    except AwssError as e:
        _fail(e)

    if config.source:
        logger.info(t("cli.config_loaded", path=config.source))

    ctx.ensure_object(dict)
    ctx.obj["lang"] = lang
    ctx.obj["config"] = config


# help 텍스트 동적 설정
cli.help = _build_help_text()


# =============================================================================
# 리소스 검색 명령어
# =============================================================================


def _filter_option(field: FilterField) -> click.Option:
    """FilterField -> click 옵션 (반복 가능, 쉼표 구분)"""
    decls = [f"--{field.key}"]
    if field.short:
        decls.append(field.short)
    decls.append(field.key.replace("-", "_"))
    return click.Option(
        decls,
        multiple=True,
        metavar="VALUES",
        help=field.help,
    )


def run_search(ctx: Context, kind: ResourceKind, filters: FilterSet, sort_field: str | None) -> None:
    """전역 설정을 적용해 검색 실행

    입력 검증(리소스 종류, 정렬 키, 필터)은 프로파일/리전 확장과
    인증 프로브보다 먼저 수행되므로 잘못된 입력은 네트워크 호출 없이 거부됩니다.
    """
    from core.auth import get_session, resolve_profiles
    from core.parallel import ParallelConfig
    from core.region import resolve_regions
    from core.search.coordinator import SearchCoordinator

    config: AppConfig = ctx.obj["config"]

    try:
        coordinator = SearchCoordinator(
            config=ParallelConfig(max_workers=config.max_workers, timeout=config.timeout),
            log=logger,
        )
        coordinator.validate(kind.name, filters, sort_field, region=settings.DEFAULT_REGION)

        profiles = resolve_profiles(config.profiles)
        regions = resolve_regions(
            config.regions,
            session_getter=lambda: get_session(profiles[0], settings.DEFAULT_REGION),
            known_regions=config.all_regions,
        )

        summary = coordinator.execute(
            kind.name,
            profiles=profiles,
            regions=regions,
            filters=filters,
            sort_field=sort_field,
            render_options=RenderOptions(
                output=config.output,
                show_empty=config.show_empty,
                show_tags=config.show_tags,
            ),
        )
    except AwssError as e:
        _fail(e)
    except KeyboardInterrupt:
        click.echo(t("cli.interrupted"), err=True)
        raise SystemExit(130) from None

    logger.info(t("cli.search_summary", total=summary.total, failed=summary.failed, timed_out=summary.timed_out))


def make_search_command(kind: ResourceKind) -> click.Command:
    """ResourceKind -> 검색 명령어 (필터 옵션 + --sort)"""
    params: list[click.Parameter] = [_filter_option(field) for field in kind.filter_fields]
    params.append(
        click.Option(
            ["--sort", "sort_field"],
            default=kind.default_sort,
            show_default=True,
            help=f"Sort key, one of: {', '.join(kind.schema.sort_keys())}",
        )
    )

    @click.pass_context
    def cmd(ctx: Context, sort_field: str | None, **values: tuple[str, ...]) -> None:
        filters = FilterSet({field.key: split_values(values[field.key.replace("-", "_")]) for field in kind.filter_fields})
        run_search(ctx, kind, filters, sort_field or None)

    return click.Command(
        name=kind.name,
        callback=cmd,
        params=params,
        help=t("cli.help_resource_command", description=kind.description),
        short_help=kind.description,
    )


def _register_resource_commands() -> None:
    """discovery 기반 리소스 명령어 자동 등록"""
    for kind in get_registry():
        cli.add_command(make_search_command(kind))


# 리소스 명령어 자동 등록
_register_resource_commands()


if __name__ == "__main__":
    cli()
