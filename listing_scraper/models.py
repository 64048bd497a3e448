"""
Data models — the structure of our data.
A listing page is read into a ListingBuilder field by field, then frozen into a ListingRecord.
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Optional

HISTOGRAM_BUCKETS = 5


@dataclass(frozen=True)
class Review:
    """A single user review as rendered on the listing page."""
    author_url: str = ""
    author_name: str = ""
    author_pic_url: str = ""
    permalink: str = ""
    review_date: Optional[str] = None   # As published, None if the page shows none
    star_rating: Optional[int] = None   # 0 to 5 stars, None = rating control missing (unknown)
    title: str = ""
    body: str = ""
    timestamp: Optional[datetime] = None  # When we parsed it, not when it was written

    @property
    def rating_known(self) -> bool:
        return self.star_rating is not None


@dataclass(frozen=True)
class ListingRecord:
    """Everything we could read from one app's listing page."""
    package_name: str                   # e.g., "com.spotify.music" — supplied by the caller
    title: str = ""
    icon: str = ""
    developer: str = ""
    developer_email: str = ""
    developer_website: str = ""
    category: str = ""                  # Display text, e.g. "Music & Audio"
    genre: str = ""                     # Category slug, e.g. "MUSIC_AND_AUDIO"
    summary: str = ""
    description: str = ""               # HTML fragment
    version: str = ""
    date_published: Optional[str] = None  # Locale formatted, left as-is; None if not shown
    min_os_version: Optional[str] = None
    content_rating: str = ""
    file_size: str = ""
    price: Optional[float] = None       # 0.0 means free, None means no price on the page
    offers_in_app_purchases: bool = False
    contains_ads: bool = False
    min_downloads: Optional[int] = None
    max_downloads: Optional[int] = None
    rating_histogram: tuple[int, ...] = (0,) * HISTOGRAM_BUCKETS  # 1 star .. 5 stars
    rating: Optional[float] = None
    video: str = ""
    screenshots: tuple[str, ...] = ()
    reviews: tuple[Review, ...] = ()
    whats_new: str = ""

    @property
    def is_free(self) -> bool:
        return self.price == 0

    @property
    def download_range(self) -> Optional[tuple[int, int]]:
        if self.min_downloads is None or self.max_downloads is None:
            return None
        return self.min_downloads, self.max_downloads

    @property
    def total_ratings(self) -> int:
        return sum(self.rating_histogram)

    def to_dict(self, include_timestamps: bool = True) -> dict:
        """
        Convert to plain JSON-friendly types.

        Args:
            include_timestamps: Set to False to drop the review extraction time,
                                e.g. when comparing two runs over the same page.
        """
        data = asdict(self)
        data["rating_histogram"] = list(self.rating_histogram)
        data["screenshots"] = list(self.screenshots)
        data["reviews"] = list(data["reviews"])
        for review in data["reviews"]:
            if not include_timestamps:
                review.pop("timestamp")
            elif review["timestamp"] is not None:
                review["timestamp"] = review["timestamp"].isoformat()
        return data


@dataclass
class ListingBuilder:
    """
    The record under construction.

    Field rules write into this one attribute at a time; nothing outside the
    extraction pass ever sees it. build() is the only way out.
    """
    package_name: str
    title: str = ""
    icon: str = ""
    developer: str = ""
    developer_email: str = ""
    developer_website: str = ""
    category: str = ""
    genre: str = ""
    summary: str = ""
    description: str = ""
    version: str = ""
    date_published: Optional[str] = None
    min_os_version: Optional[str] = None
    content_rating: str = ""
    file_size: str = ""
    price: Optional[float] = None
    offers_in_app_purchases: bool = False
    contains_ads: bool = False
    download_range: Optional[tuple[int, int]] = None
    rating_histogram: list[int] = field(default_factory=list)
    rating: Optional[float] = None
    video: str = ""
    screenshots: list[str] = field(default_factory=list)
    reviews: list[Review] = field(default_factory=list)
    whats_new: str = ""

    def build(self) -> ListingRecord:
        """Freeze into a ListingRecord. Cannot fail."""
        histogram = list(self.rating_histogram[:HISTOGRAM_BUCKETS])
        histogram += [0] * (HISTOGRAM_BUCKETS - len(histogram))
        min_downloads, max_downloads = self.download_range or (None, None)

        return ListingRecord(
            package_name=self.package_name,
            title=self.title,
            icon=self.icon,
            developer=self.developer,
            developer_email=self.developer_email,
            developer_website=self.developer_website,
            category=self.category,
            genre=self.genre,
            summary=self.summary,
            description=self.description,
            version=self.version,
            date_published=self.date_published,
            min_os_version=self.min_os_version,
            content_rating=self.content_rating,
            file_size=self.file_size,
            price=self.price,
            offers_in_app_purchases=self.offers_in_app_purchases,
            contains_ads=self.contains_ads,
            min_downloads=min_downloads,
            max_downloads=max_downloads,
            rating_histogram=tuple(histogram),
            rating=self.rating,
            video=self.video,
            screenshots=tuple(self.screenshots),
            reviews=tuple(self.reviews),
            whats_new=self.whats_new,
        )
