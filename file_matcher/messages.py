"""User-facing messages in English and Chinese."""

import re
from typing import Union

from .models.match import MatchOutcome, MatchStatus

LANGUAGES = ("en", "zh")

TRANSLATIONS: dict[str, dict[str, str]] = {
    "en": {
        "please_upload_files": "Please upload files first",
        "please_enter_codes": "Please enter product codes to match",
        "please_enter_valid_codes": "Please enter valid product codes",
        "no_files_of_type": "None of the {count} loaded files have the selected file type",
        "no_files_matched": "No files matched the given product codes. Searched in {count} files.",
        "found_matching_files": "Found {count} matching files",
        "unmatched_codes": "{count} product codes were not found in any uploaded file",
        "no_matched_files_to_download": "No matched files to download",
        "downloaded_files_as_zip": "Downloaded {count} files as ZIP",
        "error_creating_zip": "Error creating ZIP file. Please try again.",
        "successfully_loaded_files": "Successfully loaded {count} files",
        "error_loading_files": "Error loading files. Please try again.",
        "operation_in_progress": "Another {operation} is still running",
        "creating_zip_file": "Creating ZIP file...",
        "processing_files": "Processing files...",
    },
    "zh": {
        "please_upload_files": "请先上传文件",
        "please_enter_codes": "请输入要匹配的产品代码",
        "please_enter_valid_codes": "请输入有效的产品代码",
        "no_files_of_type": "已加载的{count}个文件中没有所选类型的文件",
        "no_files_matched": "没有文件匹配给定的产品代码。在{count}个文件中搜索。",
        "found_matching_files": "找到{count}个匹配文件",
        "unmatched_codes": "{count}个产品代码在已上传的文件中未找到",
        "no_matched_files_to_download": "没有匹配的文件可下载",
        "downloaded_files_as_zip": "已下载{count}个文件为ZIP",
        "error_creating_zip": "创建ZIP文件时出错。请重试。",
        "successfully_loaded_files": "成功加载{count}个文件",
        "error_loading_files": "加载文件时出错。请重试。",
        "operation_in_progress": "另一个{operation}操作仍在进行中",
        "creating_zip_file": "创建ZIP文件中...",
        "processing_files": "处理文件中...",
    },
}

_PLACEHOLDER = re.compile(r"\{(\w+)\}")


def format_message(template: str, **params: Union[str, int]) -> str:
    """Fill {name} placeholders; unknown ones are left as they are."""
    def replace(match: re.Match) -> str:
        key = match.group(1)
        return str(params[key]) if key in params else match.group(0)

    return _PLACEHOLDER.sub(replace, template)


def translate(key: str, language: str = "en", **params: Union[str, int]) -> str:
    catalog = TRANSLATIONS.get(language, TRANSLATIONS["en"])
    template = catalog.get(key, TRANSLATIONS["en"].get(key, key))
    return format_message(template, **params)


def outcome_message(outcome: MatchOutcome, language: str = "en", file_count: int = 0) -> str:
    """Render a match outcome for the presentation layer."""
    status = outcome.status
    result = outcome.result
    if status == MatchStatus.NO_FILES:
        return translate("please_upload_files", language)
    if status == MatchStatus.NO_CODES:
        return translate("please_enter_codes", language)
    if status == MatchStatus.INVALID_CODES:
        return translate("please_enter_valid_codes", language)
    if status == MatchStatus.NO_FILES_OF_TYPE:
        return translate("no_files_of_type", language, count=file_count)
    if status == MatchStatus.NO_MATCH:
        return translate("no_files_matched", language, count=result.searched_count)

    message = translate("found_matching_files", language, count=len(result.matched_files))
    if result.unmatched_codes:
        message += ". " if language == "en" else "。"
        message += translate("unmatched_codes", language, count=len(result.unmatched_codes))
    return message
