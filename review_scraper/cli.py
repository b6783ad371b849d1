from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

from .errors import RunAborted
from .excel_writer import DEFAULT_FILE_NAME, unique_file_name, write_reviews_to_excel
from .extract import extract_product_id
from .fetch import DEFAULT_TIMEOUT_SECONDS, PageFetcher, build_api_url, create_session
from .pagination import DEFAULT_MAX_PAGE_BOUND, PaginationController
from .retry import DEFAULT_MAX_RETRIES, RetryPolicy
from .types import AggregateState, Empty, PageResult, Records


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

MESSAGES = {
    "ru": {
        "api_url": "API Base URL: {url}",
        "stage_fetch": "[1/3] Загрузка отзывов постранично…",
        "page_ok": "[{page}/{total}] Страница {page} сохранена ({count} отзывов)",
        "page_empty": "[{page}/{total}] На странице {page} нет отзывов. Остановка.",
        "page_fail": "[{page}/{total}] Не удалось получить страницу {page}. Остановка.",
        "partial": "[warn] загрузка остановлена на странице {page}, сохраняем собранное",
        "aborted": "Не удалось получить ни одной страницы",
        "stage_save": "[2/3] Сохранение в Excel…",
        "stage_done": "[3/3] Готово к завершению",
        "success": "Парсинг успешно завершён. Сохранено отзывов: {count}",
        "file": "Файл: {path}",
        "error": "Ошибка парсинга: {error}",
        "interrupted": "Прервано пользователем",
        "help_desc": (
            "Сбор всех отзывов о товаре через постраничный API и экспорт в Excel.\n"
            "Принимает ссылку на товар (dkp-<id>) или числовой идентификатор."
        ),
        "help_url": "Ссылка на товар или его идентификатор",
        "help_out": "Путь для сохранения Excel (по умолчанию comments.xlsx, с отметкой времени при совпадении)",
        "help_max_pages": "Максимальное количество запрашиваемых страниц",
        "help_retries": "Количество повторов страницы при сетевых ошибках",
        "help_delay": "Задержка между повторами (сек)",
        "help_timeout": "Таймаут запроса (сек)",
        "help_ua": "Переопределить User-Agent",
        "help_lang": "Язык сообщений: ru или en (по умолчанию ru)",
        "help_verbose": "Подробный журнал",
    },
    "en": {
        "api_url": "API Base URL: {url}",
        "stage_fetch": "[1/3] Fetching review pages…",
        "page_ok": "[{page}/{total}] Data for page {page} saved ({count} reviews)",
        "page_empty": "[{page}/{total}] No comments found on page {page}. Stopping.",
        "page_fail": "[{page}/{total}] Failed to fetch page {page}. Stopping.",
        "partial": "[warn] fetching stopped at page {page}, keeping collected reviews",
        "aborted": "Failed to fetch any data",
        "stage_save": "[2/3] Saving to Excel…",
        "stage_done": "[3/3] Finalizing",
        "success": "Parsing has been successfully completed. Saved reviews: {count}",
        "file": "File: {path}",
        "error": "Parsing error: {error}",
        "interrupted": "Interrupted by user",
        "help_desc": (
            "Collect all reviews of a product through the paginated API and export to Excel.\n"
            "Accepts a product URL (dkp-<id>) or a numeric product id."
        ),
        "help_url": "Product URL or product id",
        "help_out": "Path to Excel output (default comments.xlsx, timestamped on collision)",
        "help_max_pages": "Maximum number of pages to request",
        "help_retries": "Retry count per page for network errors",
        "help_delay": "Delay between retries (sec)",
        "help_timeout": "Request timeout (sec)",
        "help_ua": "Override User-Agent",
        "help_lang": "Messages language: ru or en (default ru)",
        "help_verbose": "Verbose logging",
    },
}


def _msg(lang: str, key: str, **kwargs) -> str:
    lang_key = lang if lang in MESSAGES else "ru"
    template = MESSAGES[lang_key].get(key, "")
    return template.format(**kwargs)


def _progress_printer(lang: str, max_pages: int):
    known = {"total": "?"}

    def on_page(page: int, result: PageResult) -> None:
        if isinstance(result, Records):
            if page == 1:
                declared = result.declared_total_pages or 1
                known["total"] = min(declared, max_pages)
            print(_msg(lang, "page_ok", page=page, total=known["total"], count=len(result.items)), flush=True)
        elif isinstance(result, Empty):
            print(_msg(lang, "page_empty", page=page, total=known["total"]), flush=True)
        else:
            print(_msg(lang, "page_fail", page=page, total=known["total"]), file=sys.stderr)

    return on_page


def scrape_reviews_to_excel(
    url: str,
    out_path: Optional[str] = None,
    max_pages: int = DEFAULT_MAX_PAGE_BOUND,
    retries: int = DEFAULT_MAX_RETRIES,
    delay: float = 0.0,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    user_agent: Optional[str] = None,
    lang: str = "ru",
    session=None,
) -> AggregateState:
    """High-level convenience function: fetch every review page of a product and save into Excel.

    Raises ConfigurationError before any request if no product id is found,
    and RunAborted (without writing a file) if the first page cannot be fetched.
    Returns the final AggregateState; a run that stopped early still counts as success.
    """
    product_id = extract_product_id(url)
    print(_msg(lang, "api_url", url=build_api_url(product_id)), flush=True)

    session = session or create_session(user_agent=user_agent)
    fetcher = PageFetcher(product_id, session=session, timeout_seconds=timeout)
    policy = RetryPolicy(fetcher.fetch, max_retries=retries, delay=delay)
    controller = PaginationController(policy, on_page=_progress_printer(lang, max_pages))

    print(_msg(lang, "stage_fetch"), flush=True)
    state = controller.run(max_page_bound=max_pages)
    if state.aborted:
        raise RunAborted(state, _msg(lang, "aborted"))
    if state.failure is not None:
        print(_msg(lang, "partial", page=state.last_page_attempted), file=sys.stderr)

    print(_msg(lang, "stage_save"), flush=True)
    target = out_path or unique_file_name(DEFAULT_FILE_NAME)
    write_reviews_to_excel(state.records, out_path=target)
    state.output_path = target
    print(_msg(lang, "stage_done"), flush=True)
    return state


def _build_arg_parser(lang: str = "ru") -> argparse.ArgumentParser:
    loc = MESSAGES.get(lang, MESSAGES["ru"])
    p = argparse.ArgumentParser(
        prog="review-scraper",
        description=loc["help_desc"],
    )
    p.add_argument("url", help=loc["help_url"])
    p.add_argument(
        "-o",
        "--out",
        dest="out_path",
        default=None,
        help=loc["help_out"],
    )
    p.add_argument(
        "-p",
        "--max-pages",
        dest="max_pages",
        type=int,
        default=DEFAULT_MAX_PAGE_BOUND,
        help=loc["help_max_pages"],
    )
    p.add_argument(
        "-r",
        "--retries",
        dest="retries",
        type=int,
        default=DEFAULT_MAX_RETRIES,
        help=loc["help_retries"],
    )
    p.add_argument(
        "-d",
        "--delay",
        dest="delay",
        type=float,
        default=0.0,
        help=loc["help_delay"],
    )
    p.add_argument(
        "-T",
        "--timeout",
        dest="timeout",
        type=float,
        default=DEFAULT_TIMEOUT_SECONDS,
        help=loc["help_timeout"],
    )
    p.add_argument(
        "-H",
        "--user-agent",
        dest="user_agent",
        default=None,
        help=loc["help_ua"],
    )
    p.add_argument(
        "--lang",
        dest="lang",
        choices=["ru", "en"],
        default=lang,
        help=loc["help_lang"],
    )
    p.add_argument(
        "-v",
        "--verbose",
        dest="verbose",
        action="store_true",
        help=loc["help_verbose"],
    )
    return p


def main(argv: Optional[list[str]] = None) -> int:
    parser = _build_arg_parser("ru")
    args = parser.parse_args(argv)
    lang = args.lang
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format=LOG_FORMAT,
    )
    try:
        state = scrape_reviews_to_excel(
            url=args.url,
            out_path=args.out_path,
            max_pages=args.max_pages,
            retries=args.retries,
            delay=args.delay,
            timeout=args.timeout,
            user_agent=args.user_agent,
            lang=lang,
        )
        print(_msg(lang, "success", count=len(state.records)))
        print(_msg(lang, "file", path=state.output_path))
        return 0
    except KeyboardInterrupt:
        print(_msg(lang, "interrupted"), file=sys.stderr)
        return 130
    except Exception as exc:
        print(_msg(lang, "error", error=exc), file=sys.stderr)
        return 1
