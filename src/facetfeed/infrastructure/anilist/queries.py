"""GraphQL documents sent to AniList."""

from __future__ import annotations

from typing import Final

SEARCH_QUERY: Final[str] = """
query Search(
  $page: Int
  $perPage: Int
  $ids: [Int]
  $search: String
  $onList: Boolean
  $genre: [String]
  $seasonYear: Int
  $season: MediaSeason
  $format: [MediaFormat]
  $status: [MediaStatus]
  $sort: [MediaSort] = [SEARCH_MATCH]
) {
  Page(page: $page, perPage: $perPage) {
    pageInfo {
      hasNextPage
    }
    media(
      type: ANIME
      id_in: $ids
      search: $search
      onList: $onList
      genre_in: $genre
      seasonYear: $seasonYear
      season: $season
      format_in: $format
      status_in: $status
      sort: $sort
    ) {
      id
      title {
        userPreferred
        romaji
        english
        native
      }
      coverImage {
        large
        color
      }
      format
      episodes
      averageScore
      season
      seasonYear
      status
      genres
    }
  }
}
"""
