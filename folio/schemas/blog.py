from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class Post(BaseModel):
    """One record of the post index; frozen once loaded."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    title: str
    excerpt: str = ""
    date: str = ""
    categories: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    image: Optional[str] = None
    contentPath: Optional[str] = None
    contentFile: Optional[str] = None
    seoTitle: Optional[str] = None
    seoDescription: Optional[str] = None


class PostCard(BaseModel):
    id: str
    url: str
    title: str
    excerpt: str = ""
    date: str = ""
    categories: List[str] = Field(default_factory=list)
    category_keys: List[str] = Field(default_factory=list)
    image: Optional[str] = None
    html: str


class CategoryFilter(BaseModel):
    key: str
    label: str


class MetaField(BaseModel):
    """A ``<meta>`` slot keyed by ``name`` or ``property``."""

    attr: str
    key: str
    content: str

    @property
    def slot(self) -> Tuple[str, str]:
        return self.attr, self.key


class PageMetadata(BaseModel):
    title: str
    description: str
    url: str
    site_name: str
    image: Optional[str] = None

    def to_meta_fields(self) -> List[MetaField]:
        fields = [
            MetaField(attr="name", key="description", content=self.description),
            MetaField(attr="property", key="og:title", content=self.title),
            MetaField(attr="property", key="og:description", content=self.description),
            MetaField(attr="property", key="og:type", content="article"),
            MetaField(attr="property", key="og:url", content=self.url),
            MetaField(attr="property", key="og:site_name", content=self.site_name),
        ]
        if self.image:
            fields.append(MetaField(attr="property", key="og:image", content=self.image))
            fields.append(MetaField(attr="name", key="twitter:image", content=self.image))
        fields.extend(
            [
                MetaField(
                    attr="name",
                    key="twitter:card",
                    content="summary_large_image" if self.image else "summary",
                ),
                MetaField(attr="name", key="twitter:title", content=self.title),
                MetaField(attr="name", key="twitter:description", content=self.description),
            ]
        )
        return fields


class PostDetailView(BaseModel):
    post: Post
    formatted_date: str
    reading_time: str
    content_path: str
    html: str
    metadata: PageMetadata
