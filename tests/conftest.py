import pytest

from listing_scraper.document import load_document

BASE_URL = "https://play.google.com/store/apps/details?id=com.example.app"

REVIEW_CARD = """
<div class="single-review">
  <span class="author-name"><a href="/store/people/details?id=111">Jane Doe</a></span>
  <a href="/store/people/details?id=111"><img src=" https://lh3.example.com/jane.png "></a>
  <span class="review-date">March 3, 2016</span>
  <a class="reviews-permalink" href="/store/apps/details?id=com.example.app&amp;reviewId=abc"></a>
  <div class="tiny-star star-rating-non-editable-container">
    <div class="current-rating" style="width: 80%;"></div>
  </div>
  <div class="review-body with-review-wrapper">
    <span class="review-title">Great app</span> Works offline too. <div class="review-link"><a>Full Review</a></div>
  </div>
</div>
"""


def make_listing_html(price="0", histogram=True, video=True, ads=True, in_app=True,
                      category=True, reviews=(REVIEW_CARD,), downloads="10,000 - 50,000",
                      score="4.3", details=True):
    """Build a listing page in the old Play Store layout. Flags drop optional sections."""
    parts = ['<html><head><meta name="description" content="A tidy example app."></head><body>']
    if details:
        parts.append('<div class="details-info">')
        parts.append('<img class="cover-image" src="//lh3.example.com/icon.png">')
        parts.append('<div class="document-title"><div>Example App</div></div>')
        parts.append('<a class="document-subtitle primary"><span itemprop="name">Example Labs</span></a>')
        if category:
            parts.append('<a class="document-subtitle category" href="/store/apps/category/GAME">'
                         '<span itemprop="genre">Games</span></a>')
        if in_app:
            parts.append('<div class="inapp-msg">Offers in-app purchases</div>')
        if ads:
            parts.append('<span class="ads-supported-label-msg">Contains Ads</span>')
        if price is not None:
            parts.append(f'<meta itemprop="price" content="{price}">')
        parts.append('</div>')

    parts.append('<div class="rating-box"><div class="score">%s</div></div>' % score)
    if histogram:
        parts.append('<div class="rating-histogram">')
        for bucket, count in (("five", "90"), ("four", "4"), ("three", "3"), ("two", "2"), ("one", "1")):
            parts.append(f'<div class="rating-bar-container {bucket}"><span class="bar-number">{count}</span></div>')
        parts.append('</div>')

    parts.append('<div class="screenshots"><div class="thumbnails">')
    parts.append('<img class="screenshot" src="/shots/1.png">')
    parts.append('<img class="screenshot" src="https://cdn.example.com/shots/2.png">')
    parts.append('</div>')
    if video:
        parts.append('<span class="preview-overlay-container" '
                     'data-video-url="https://www.youtube.com/embed/xyz?ps=play&amp;vq=large"></span>')
    parts.append('</div>')

    parts.append('<div class="details-section-contents">')
    parts.append('<div itemprop="description"><div>First line<p>Second line</p></div></div>')
    parts.append('<div class="recent-change">Bug fixes</div><div class="recent-change">New icons</div>')
    parts.append('<div class="content" itemprop="datePublished">March 1, 2016</div>')
    parts.append('<div class="content" itemprop="fileSize">12M</div>')
    if downloads is not None:
        parts.append(f'<div class="content" itemprop="numDownloads">{downloads}</div>')
    parts.append('<div class="content" itemprop="softwareVersion"> 2.1.0 </div>')
    parts.append('<div class="content" itemprop="operatingSystems">4.1 and up</div>')
    parts.append('<div class="content" itemprop="contentRating">Everyone</div>')
    parts.append('<a class="dev-link" href="https://www.google.com/url?q=https://example.com/&amp;sa=D">Visit website</a>')
    parts.append('<a class="dev-link" href="mailto:dev@example.com">Email dev@example.com</a>')
    parts.append('</div>')

    parts.extend(reviews)
    parts.append('</body></html>')
    return "\n".join(parts)


@pytest.fixture
def listing_html():
    return make_listing_html()


@pytest.fixture
def listing_document(listing_html):
    return load_document(listing_html, BASE_URL)
