"""
cli/i18n/messages/cli_commands.py - CLI Command Messages

Contains translations for the awss command group, search subcommands and error output.
"""

from __future__ import annotations

CLI_MESSAGES = {
    # =========================================================================
    # Help Text
    # =========================================================================
    "help_intro": {
        "ko": "여러 AWS 프로파일과 리전에서 EC2 리소스를 동시에 검색합니다.",
        "en": "Search EC2 resources across many AWS profiles and regions at once.",
    },
    "help_examples": {
        "ko": "예시:",
        "en": "Examples:",
    },
    "help_resource_command": {
        "ko": "{description}\n\n여러 값은 쉼표로 구분하거나 옵션을 반복합니다. 필터가 여러 개면 모두 만족해야 합니다.",
        "en": "{description}\n\nSeparate multiple values with commas or repeat the option. Multiple filters are combined (AND).",
    },
    # =========================================================================
    # Errors
    # =========================================================================
    "error_prefix": {
        "ko": "오류",
        "en": "Error",
    },
    "interrupted": {
        "ko": "사용자에 의해 중단되었습니다",
        "en": "Interrupted by user",
    },
    "config_loaded": {
        "ko": "설정 파일: {path}",
        "en": "Config file: {path}",
    },
    # =========================================================================
    # Summary
    # =========================================================================
    "search_summary": {
        "ko": "검색 완료: {total}개 (프로파일, 리전) 중 실패 {failed}, 시간 초과 {timed_out}",
        "en": "Search finished: {total} (profile, region) pairs, {failed} failed, {timed_out} timed out",
    },
}
