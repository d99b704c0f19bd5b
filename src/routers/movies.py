from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from config.dependencies import require_admin
from database import get_db
from database.models.lookups import (
    CountryModel,
    GenreModel,
    LanguageModel,
    MovieTypeModel
)
from database.models.movies import MovieModel
from pipeline.filters import PathParamRule, PathParamsFilter
from pipeline.listing import ListQuery, execute_list_query, get_list_query
from pipeline.records import apply_changes, commit_or_rollback, get_record_or_404
from pipeline.references import ReferenceRule, validate_references
from pipeline.responses import ResponseEnvelope
from schemas.common import ListPayloadSchema
from schemas.examples.common import error_responses
from schemas.movies import (
    MovieCreateSchema,
    MovieDetailSchema,
    MovieSchema,
    MovieUpdateSchema
)

router = APIRouter()

MOVIE_POPULATE = (
    "genre_links.genre",
    "movie_type",
    "spoken_language",
    "subtitle_language",
    "country"
)

movie_path_filter = PathParamsFilter([
    PathParamRule(field="genre_links.genre_id", param="genre_id", model=GenreModel),
    PathParamRule(field="movie_type_id", param="movie_type_id", model=MovieTypeModel),
    PathParamRule(field="country_id", param="country_id", model=CountryModel)
])

MOVIE_REFERENCES = (
    ReferenceRule(GenreModel, source_field="genre_ids"),
    ReferenceRule(MovieTypeModel, source_field="movie_type_id"),
    ReferenceRule(LanguageModel, source_field="spoken_language_id"),
    ReferenceRule(LanguageModel, source_field="subtitle_language_id"),
    ReferenceRule(CountryModel, source_field="country_id"),
)


@router.get(
    "/movies/",
    response_model=ResponseEnvelope[ListPayloadSchema],
    status_code=status.HTTP_200_OK,
    summary="List movies",
    description=(
        "(PUBLIC) Get all movies with selecting, sorting and pagination. "
        "Genres, movie type, languages and country are populated."
    ),
    responses=error_responses(404)
)
@router.get(
    "/genres/{genre_id}/movies/",
    response_model=ResponseEnvelope[ListPayloadSchema],
    status_code=status.HTTP_200_OK,
    summary="List movies of a genre",
    responses=error_responses(404),
    tags=["genres"]
)
@router.get(
    "/movie-types/{movie_type_id}/movies/",
    response_model=ResponseEnvelope[ListPayloadSchema],
    status_code=status.HTTP_200_OK,
    summary="List movies of a movie type",
    responses=error_responses(404),
    tags=["movie-types"]
)
@router.get(
    "/countries/{country_id}/movies/",
    response_model=ResponseEnvelope[ListPayloadSchema],
    status_code=status.HTTP_200_OK,
    summary="List movies of a country",
    responses=error_responses(404),
    tags=["countries"]
)
async def get_movies(
    query: ListQuery = Depends(get_list_query),
    filters: dict = Depends(movie_path_filter),
    db: AsyncSession = Depends(get_db)
) -> ResponseEnvelope[ListPayloadSchema]:
    """Get a page of movies, scoped by the nested route if any.

    Args:
        query (ListQuery): Parsed ``select``/``sort``/``limit``/``page``/``paging``.
        filters (dict): Filters derived from the path parameters.
        db (AsyncSession): Database session dependency.

    Returns:
        ResponseEnvelope[ListPayloadSchema]: Movies and pagination metadata.
    """
    page = await execute_list_query(
        db, MovieModel, query, filters=filters, populate=MOVIE_POPULATE
    )
    return ResponseEnvelope.ok(
        page.to_payload(MovieDetailSchema, query.select_fields)
    )


@router.get(
    "/movies/{movie_id}/",
    response_model=ResponseEnvelope[MovieDetailSchema],
    status_code=status.HTTP_200_OK,
    summary="Get a movie",
    description="(PUBLIC) Get a movie with its populated references.",
    responses=error_responses(404)
)
async def get_movie(
    movie_id: int,
    db: AsyncSession = Depends(get_db)
) -> ResponseEnvelope[MovieDetailSchema]:
    movie = await get_record_or_404(db, MovieModel, movie_id, MOVIE_POPULATE)
    return ResponseEnvelope.ok(MovieDetailSchema.model_validate(movie))


@router.post(
    "/movies/",
    response_model=ResponseEnvelope[MovieSchema],
    status_code=status.HTTP_201_CREATED,
    summary="Create a movie",
    description=(
        "(ADMIN) Create a movie. Every genre, the movie type and the optional "
        "languages and country must exist."
    ),
    responses=error_responses(400, 401, 403, 404)
)
async def create_movie(
    data: MovieCreateSchema,
    authorized=Depends(require_admin),
    db: AsyncSession = Depends(get_db)
) -> ResponseEnvelope[MovieSchema]:
    """Create a new movie entry in the database.

    Genres keep the order in which they are submitted.

    Args:
        data (MovieCreateSchema): Data for the new movie.
        authorized: Dependency to check admin rights.
        db (AsyncSession): Database session dependency.

    Returns:
        ResponseEnvelope[MovieSchema]: The created movie with its references
            as identifiers, genres in submission order.

    Raises:
        NotFoundError: If a referenced genre, movie type, language or
            country does not exist. Nothing is written in that case.
    """
    payload = await validate_references(
        db, MOVIE_REFERENCES, data.model_dump(exclude_none=True)
    )
    movie = MovieModel(**payload)
    db.add(movie)
    await commit_or_rollback(db)

    movie = await get_record_or_404(db, MovieModel, movie.id, ("genre_links",))
    return ResponseEnvelope.ok(
        MovieSchema.model_validate(movie),
        message="Movie is created successfully"
    )


@router.put(
    "/movies/{movie_id}/",
    response_model=ResponseEnvelope[MovieSchema],
    status_code=status.HTTP_200_OK,
    summary="Update a movie",
    description="(ADMIN) Update the given fields of a movie. A new genre list replaces the old one.",
    responses=error_responses(400, 401, 403, 404)
)
async def update_movie(
    movie_id: int,
    data: MovieUpdateSchema,
    authorized=Depends(require_admin),
    db: AsyncSession = Depends(get_db)
) -> ResponseEnvelope[MovieSchema]:
    movie = await get_record_or_404(db, MovieModel, movie_id, ("genre_links",))
    changes = await validate_references(
        db,
        MOVIE_REFERENCES,
        data.model_dump(exclude_unset=True, exclude_none=True)
    )
    apply_changes(movie, changes)
    await commit_or_rollback(db)

    movie = await get_record_or_404(db, MovieModel, movie_id, ("genre_links",))
    return ResponseEnvelope.ok(
        MovieSchema.model_validate(movie),
        message="Movie is updated successfully"
    )


@router.delete(
    "/movies/{movie_id}/",
    response_model=ResponseEnvelope[None],
    status_code=status.HTTP_200_OK,
    summary="Delete a movie",
    description="(ADMIN) Delete a movie together with its showtimes.",
    responses=error_responses(401, 403, 404)
)
async def delete_movie(
    movie_id: int,
    authorized=Depends(require_admin),
    db: AsyncSession = Depends(get_db)
) -> ResponseEnvelope[None]:
    movie = await get_record_or_404(db, MovieModel, movie_id)
    await db.delete(movie)
    await commit_or_rollback(db)
    return ResponseEnvelope.ok(message="Movie is deleted successfully")
