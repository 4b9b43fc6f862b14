import argparse
import asyncio
import json
import logging
import sys
from typing import Optional

from cinedex.config import settings
from cinedex.scraper.errors import NavigationError
from cinedex.scraper.imdb import IMDbScraper


async def run(url: Optional[str], trending: bool, output: Optional[str]) -> int:
    scraper = IMDbScraper()

    try:
        if trending:
            print(f"Scraping list: {url or settings.trending_url}")
            items = await scraper.scrape_trending(url)
            data = [item.model_dump(mode="json") for item in items]
        else:
            print(f"Scraping title: {url}")
            record = await scraper.scrape_complete_movie_data(url)
            data = record.model_dump(mode="json")
    except NavigationError as e:
        print(f"FAILED: {e}")
        return 1

    text = json.dumps(data, indent=2, ensure_ascii=False)
    if output:
        with open(output, "w", encoding="utf-8") as f:
            f.write(text)
        print(f"Saved to {output}")
    else:
        print(text)
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Scrape an IMDb title or list page")
    parser.add_argument("--url", required=False, default=None)
    parser.add_argument("--trending", action="store_true", help="Treat the URL as a chart/list page")
    parser.add_argument("--output", required=False, default=None, help="Write JSON to this file")
    args = parser.parse_args()

    if not args.trending and not args.url:
        parser.error("--url is required unless --trending is given")

    logging.basicConfig(level=settings.log_level.upper())
    exit_code = asyncio.run(run(args.url, args.trending, args.output))
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
