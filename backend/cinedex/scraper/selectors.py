"""IMDb selector strategies.

Markup drift should be fixed here: extend or reorder a strategy list
rather than touching extractor code. Every script is a JavaScript
function of one argument (the strategy's selector) that returns plain
JSON data.
"""
from cinedex.scraper.resolution import SelectorStrategy

# Scripts

TEXT = '''(selector) => {
    const el = document.querySelector(selector);
    return el ? (el.textContent || '').trim() : '';
}'''

TEXT_ALL = '''(selector) => {
    return Array.from(document.querySelectorAll(selector))
        .map(el => (el.textContent || '').trim())
        .filter(text => text.length > 0);
}'''

HREF = '''(selector) => {
    const el = document.querySelector(selector);
    return el ? (el.getAttribute('href') || '') : '';
}'''

CONTENT = '''(selector) => {
    const el = document.querySelector(selector);
    return el ? (el.getAttribute('content') || '') : '';
}'''

EXISTS = '''(selector) => document.querySelector(selector) !== null'''

AGGREGATE_RATING = '''(selector) => {
    const root = document.querySelector(selector);
    if (!root) return null;
    const scoreEl = root.querySelector('[data-testid="hero-rating-bar__aggregate-rating__score"]') || root;
    const rating = (scoreEl.querySelector('span')?.textContent || '').trim();
    if (!rating) return null;
    const siblings = Array.from(scoreEl.parentElement?.children || []);
    const votesEl = siblings.length > 1 ? siblings[siblings.length - 1] : null;
    return {
        rating: rating,
        total_votes: votesEl && votesEl !== scoreEl ? (votesEl.textContent || '').trim() : '',
        full_rating: (scoreEl.textContent || '').replace(/\\s+/g, '').trim()
    };
}'''

ITEMPROP_RATING = '''(selector) => {
    const root = document.querySelector(selector);
    if (!root) return null;
    const rating = (root.querySelector('[itemprop="ratingValue"]')?.textContent || '').trim();
    if (!rating) return null;
    const best = (root.querySelector('[itemprop="bestRating"]')?.textContent || '10').trim();
    return {
        rating: rating,
        total_votes: (root.querySelector('[itemprop="ratingCount"]')?.textContent || '').trim(),
        full_rating: rating + '/' + best
    };
}'''

SCORE_BADGE = '''(selector) => {
    const el = document.querySelector(selector);
    if (!el) return null;
    const score = (el.textContent || '').trim();
    if (!score) return null;
    return {
        score: score,
        background_color: el.style.backgroundColor || getComputedStyle(el).backgroundColor || ''
    };
}'''

CAST_ITEMS = '''(selector) => {
    return Array.from(document.querySelectorAll(selector)).map(item => {
        const actor = item.querySelector('[data-testid="title-cast-item__actor"]')
            || Array.from(item.querySelectorAll('a[href*="/name/"]'))
                .find(a => (a.textContent || '').trim().length > 0);
        const character = item.querySelector('[data-testid="cast-item-characters-link"]')
            || item.querySelector('[data-testid="cast-item-characters-list"]')
            || item.querySelector('.character');
        const characterLink = character
            ? (character.tagName === 'A' ? character : character.querySelector('a'))
            : null;
        const img = item.querySelector('img');
        return {
            actor_name: (actor?.textContent || '').trim(),
            actor_url: actor?.getAttribute('href') || '',
            character_name: (character?.textContent || '').replace(/\\s+/g, ' ').trim(),
            character_url: characterLink?.getAttribute('href') || '',
            image_url: img?.getAttribute('src') || '',
            image_alt: img?.getAttribute('alt') || ''
        };
    }).filter(member => member.actor_name.length > 0);
}'''

VIDEO_CARDS = '''(selector) => {
    const row = document.querySelector(selector);
    if (!row) return [];
    let cards = Array.from(row.querySelectorAll('.ipc-slate-card'));
    if (cards.length === 0) {
        cards = Array.from(row.querySelectorAll('a[href*="/video/"]')).map(a => a.parentElement);
    }
    const seen = new Set();
    return cards.map(card => {
        const link = card.querySelector('a[href*="/video/"]');
        const img = card.querySelector('img');
        const title = card.querySelector('.ipc-slate-card__title-text')
            || card.querySelector('[class*="title"]');
        return {
            title: (title?.textContent || link?.getAttribute('aria-label') || '').trim(),
            video_url: link?.getAttribute('href') || '',
            image_url: img?.getAttribute('src') || '',
            image_alt: img?.getAttribute('alt') || ''
        };
    }).filter(video => {
        if (!video.video_url || seen.has(video.video_url)) return false;
        seen.add(video.video_url);
        return true;
    });
}'''

IMAGES = '''(selector) => {
    return Array.from(document.querySelectorAll(selector))
        .map(img => ({
            src: img.getAttribute('src') || '',
            alt: img.getAttribute('alt') || ''
        }))
        .filter(image => image.src.length > 0 && !image.src.startsWith('data:'));
}'''

IMG_CANDIDATES = '''(selector) => {
    const img = document.querySelector(selector);
    if (!img) return null;
    return {
        srcset: img.getAttribute('srcset') || '',
        src: img.getAttribute('src') || ''
    };
}'''

CDN_IMAGE_SCAN = '''(pattern) => {
    const img = Array.from(document.querySelectorAll('img')).find(el => {
        const src = el.getAttribute('src') || '';
        const srcset = el.getAttribute('srcset') || '';
        return src.includes(pattern) || srcset.includes(pattern);
    });
    if (!img) return null;
    return {
        srcset: img.getAttribute('srcset') || '',
        src: img.getAttribute('src') || ''
    };
}'''

LANGUAGE_ITEMS = '''(selector) => {
    return Array.from(document.querySelectorAll(selector))
        .map(el => ({
            name: (el.textContent || '').trim(),
            url: el.querySelector('a')?.getAttribute('href') || el.getAttribute('href') || ''
        }))
        .filter(language => language.name.length > 0);
}'''

LABEL_SCAN = '''(needle) => {
    const labels = document.querySelectorAll('.ipc-metadata-list-item__label');
    for (const label of labels) {
        if (!(label.textContent || '').toLowerCase().includes(needle)) continue;
        const parent = label.closest('.ipc-metadata-list-item');
        const items = parent ? Array.from(parent.querySelectorAll('.ipc-metadata-list-item__list-content-item')) : [];
        if (items.length > 0) {
            return items.map(el => ({
                name: (el.textContent || '').trim(),
                url: el.querySelector('a')?.getAttribute('href') || el.getAttribute('href') || ''
            }));
        }
    }
    return [];
}'''

VIDEO_ELEMENTS = '''() => {
    const out = [];
    document.querySelectorAll('video').forEach(video => {
        const src = video.currentSrc || video.getAttribute('src') || '';
        if (!src) return;
        out.push({
            src: src,
            type: video.getAttribute('type') || '',
            poster: video.getAttribute('poster') || '',
            id: video.id || '',
            width: video.videoWidth || video.width || null,
            height: video.videoHeight || video.height || null,
            duration: Number.isFinite(video.duration) ? video.duration : null,
            autoplay: video.autoplay,
            controls: video.controls,
            muted: video.muted,
            loop: video.loop
        });
    });
    return out;
}'''

SOURCE_ELEMENTS = '''() => {
    const out = [];
    document.querySelectorAll('video source').forEach(source => {
        const src = source.src || source.getAttribute('src') || '';
        if (!src) return;
        const video = source.closest('video');
        out.push({
            src: src,
            type: source.getAttribute('type') || '',
            poster: video?.getAttribute('poster') || '',
            id: video?.id || '',
            width: video?.videoWidth || video?.width || null,
            height: video?.videoHeight || video?.height || null,
            duration: video && Number.isFinite(video.duration) ? video.duration : null,
            autoplay: !!video?.autoplay,
            controls: !!video?.controls,
            muted: !!video?.muted,
            loop: !!video?.loop
        });
    });
    return out;
}'''

BARE_SOURCES = '''() => {
    return Array.from(document.querySelectorAll('video[src], video source[src]'))
        .map(el => ({ src: el.currentSrc || el.src || el.getAttribute('src') }))
        .filter(source => !!source.src);
}'''

LIST_ITEMS = '''(selector) => {
    const text = (root, query) => (root.querySelector(query)?.textContent || '').trim();
    return Array.from(document.querySelectorAll(selector)).map((item, index) => {
        const titleEl = item.querySelector('.ipc-title__text')
            || item.querySelector('.lister-item-header a')
            || item.querySelector('.titleColumn a')
            || item.querySelector('h3 a, h3');
        const link = item.querySelector('a.ipc-title-link-wrapper')
            || item.querySelector('.lister-item-header a')
            || item.querySelector('.titleColumn a')
            || item.querySelector('a[href*="/title/"]');
        const metadata = Array.from(item.querySelectorAll('.cli-title-metadata-item, .dli-title-metadata-item'))
            .map(el => (el.textContent || '').trim());
        const img = item.querySelector('img');

        let director = text(item, '.dli-director-item')
            || text(item, '[data-testid="title-director"] a');
        let stars = Array.from(item.querySelectorAll('.dli-cast-item, [data-testid="title-stars"] a'))
            .map(el => (el.textContent || '').trim());
        const creditLine = Array.from(item.querySelectorAll('p'))
            .find(p => /Director|Stars/.test(p.textContent || ''));
        if (creditLine && (!director || stars.length === 0)) {
            const links = Array.from(creditLine.querySelectorAll('a'));
            const ghost = creditLine.querySelector('.ghost');
            const before = links.filter(a => ghost && (ghost.compareDocumentPosition(a) & Node.DOCUMENT_POSITION_PRECEDING));
            const after = links.filter(a => !before.includes(a));
            if (!director) director = ((ghost ? before[0] : links[0])?.textContent || '').trim();
            if (stars.length === 0) stars = (ghost ? after : links.slice(1)).map(a => (a.textContent || '').trim());
        }

        return {
            index: index + 1,
            ranking: text(item, '.meter-const-ranking') || text(item, '.lister-item-index') || '',
            title: (titleEl?.textContent || '').trim(),
            year: metadata[0] || text(item, '.lister-item-year') || text(item, '.secondaryInfo'),
            runtime: metadata[1] || text(item, '.runtime'),
            certificate: metadata[2] || text(item, '.certificate'),
            rating: text(item, '.ipc-rating-star--rating')
                || text(item, '.ratings-imdb-rating strong')
                || text(item, '.imdbRating strong'),
            vote_count: text(item, '.ipc-rating-star--voteCount')
                || (item.querySelector('[name="nv"]')?.getAttribute('data-value') || ''),
            metascore: text(item, '.metacritic-score-box') || text(item, '.metascore'),
            plot: text(item, '.dli-plot-container') || text(item, '.ipc-html-content-inner-div')
                || (item.querySelectorAll('.lister-item-content p.text-muted')[1]?.textContent || '').trim(),
            director: director,
            stars: stars.filter(star => star.length > 0),
            poster_srcset: img?.getAttribute('srcset') || '',
            poster_src: img?.getAttribute('src') || img?.getAttribute('loadlate') || '',
            detail_url: link ? new URL(link.getAttribute('href') || '', location.origin).href : ''
        };
    });
}'''

# Strategy lists

TITLE = [
    SelectorStrategy('[data-testid="hero__pageTitle"] .hero__primary-text', TEXT),
    SelectorStrategy('h1[data-testid="hero__pageTitle"]', TEXT),
    SelectorStrategy('h1[data-testid="hero-title-block__title"]', TEXT),
    SelectorStrategy('.title_wrapper h1', TEXT),
    SelectorStrategy('h1', TEXT),
]

CANONICAL_URL = [
    SelectorStrategy('link[rel="canonical"]', HREF),
    SelectorStrategy('meta[property="og:url"]', CONTENT),
]

TAGLINE = [
    SelectorStrategy('[data-testid="storyline-taglines"] .ipc-metadata-list-item__list-content-item', TEXT),
    SelectorStrategy('[data-testid="storyline-taglines"] li', TEXT),
]

STORY = [
    SelectorStrategy('[data-testid="storyline-plot-summary"] .ipc-html-content-inner-div', TEXT),
    SelectorStrategy('[data-testid="storyline-plot-summary"]', TEXT),
    SelectorStrategy('[data-testid="plot-xl"]', TEXT),
    SelectorStrategy('[data-testid="plot"]', TEXT),
]

GENRES = [
    SelectorStrategy('[data-testid="storyline-genres"] .ipc-metadata-list-item__list-content-item', TEXT_ALL),
    SelectorStrategy('[data-testid="genres"] .ipc-chip__text', TEXT_ALL),
    SelectorStrategy('.ipc-chip-list__scroller .ipc-chip__text', TEXT_ALL),
]

KEYWORDS = [
    SelectorStrategy('[data-testid="storyline-plot-keywords"] .ipc-chip__text', TEXT_ALL),
    SelectorStrategy('[data-testid="storyline-plot-keywords"] a', TEXT_ALL),
]

CERTIFICATE = [
    SelectorStrategy('[data-testid="storyline-certificate"] .ipc-metadata-list-item__list-content-item', TEXT),
    SelectorStrategy('[data-testid="storyline-certificate"] li', TEXT),
]

PARENT_GUIDE = '[data-testid="storyline-parents-guide"]'

AGGREGATE_SCORE = [
    SelectorStrategy('[data-testid="hero-rating-bar__aggregate-rating"]', AGGREGATE_RATING),
    SelectorStrategy('[data-testid="hero-rating-bar__aggregate-rating__score"]', AGGREGATE_RATING),
    SelectorStrategy('[itemprop="aggregateRating"]', ITEMPROP_RATING),
]

METASCORE = [
    SelectorStrategy('.metacritic-score-box', SCORE_BADGE),
    SelectorStrategy('[data-testid="critic-reviews-title"] .score', SCORE_BADGE),
    SelectorStrategy('.metacriticScore', SCORE_BADGE),
]

CAST = [
    SelectorStrategy('[data-testid="title-cast-item"]', CAST_ITEMS),
    SelectorStrategy('[data-testid="title-cast"] .ipc-sub-grid > div', CAST_ITEMS),
    SelectorStrategy('table.cast_list tr.odd, table.cast_list tr.even', CAST_ITEMS),
]

VIDEOS = [
    SelectorStrategy('[data-testid="videos-section"] .ipc-sub-grid', VIDEO_CARDS),
    SelectorStrategy('[data-testid="videos-section"] .ipc-shoveler', VIDEO_CARDS),
    SelectorStrategy('[data-testid="videos-section"]', VIDEO_CARDS),
]

IMAGES_GALLERY = [
    SelectorStrategy('[data-testid="Photos"] .ipc-photo img', IMAGES),
    SelectorStrategy('[data-testid="Photos"] img', IMAGES),
    SelectorStrategy('.mediastrip img', IMAGES),
]

POSTER = [
    SelectorStrategy('[data-testid="hero-media__poster"] img', IMG_CANDIDATES),
    SelectorStrategy('.ipc-poster img', IMG_CANDIDATES),
    SelectorStrategy('.poster img', IMG_CANDIDATES),
]

POSTER_CDN_SCAN = SelectorStrategy('m.media-amazon.com/images/M/', CDN_IMAGE_SCAN)

LANGUAGES = [
    SelectorStrategy('[data-testid="title-details-languages"] .ipc-metadata-list-item__list-content-item', LANGUAGE_ITEMS),
    SelectorStrategy('[data-testid="storyline-languages"] .ipc-metadata-list-item__list-content-item', LANGUAGE_ITEMS),
    SelectorStrategy('.ipc-metadata-list-item:has([data-testid="title-details-languages"]) .ipc-metadata-list-item__list-content-item', LANGUAGE_ITEMS),
    SelectorStrategy('li[data-testid*="language"] .ipc-metadata-list-item__list-content-item', LANGUAGE_ITEMS),
]

LANGUAGE_LABEL_SCAN = SelectorStrategy('language', LABEL_SCAN)

LIST_ROWS = [
    SelectorStrategy('ul.ipc-metadata-list li.ipc-metadata-list-summary-item', LIST_ITEMS),
    SelectorStrategy('[data-testid="chart-layout-main-column"] li', LIST_ITEMS),
    SelectorStrategy('.lister-item', LIST_ITEMS),
    SelectorStrategy('.lister-list tr', LIST_ITEMS),
]

# Section markers waited on before extraction

MARKER_TITLE = '[data-testid="hero__pageTitle"], h1'
MARKER_STORYLINE = '[data-testid="Storyline"]'
MARKER_RATINGS = '[data-testid="hero-rating-bar__aggregate-rating"], [itemprop="aggregateRating"]'
MARKER_CAST = '[data-testid="title-cast"], table.cast_list'
MARKER_VIDEOS = '[data-testid="videos-section"]'
MARKER_IMAGES = '[data-testid="Photos"], .mediastrip'
MARKER_VIDEO_SOURCES = 'video'
MARKER_POSTER = '[data-testid="hero-media__poster"], .ipc-poster, .poster'
MARKER_LANGUAGES = '[data-testid="title-details-section"]'
MARKER_LIST = 'ul.ipc-metadata-list, .lister-list, .lister-item'
