"""Review and testimonial requests."""

from anlik_eleman.db.base import Result, service_call
from anlik_eleman.db.rows import Review, utc_now_iso
from anlik_eleman.remote import PlatformClient, eq

TABLE = "reviews"


@service_call("Değerlendirmeler alınamadı", default_factory=list)
async def list_reviews(client: PlatformClient, user_id: str) -> Result[list[Review]]:
    rows = await client.select(
        TABLE,
        {"reviewee_id": eq(user_id), "is_public": eq(True)},
        columns="*,reviewer:profiles!reviewer_id(first_name,last_name,user_type)",
        order="created_at.desc",
    )
    return Result.success([Review.model_validate(r) for r in rows])


@service_call("Değerlendirme oluşturulamadı")
async def create_review(
    client: PlatformClient,
    reviewer_id: str,
    reviewee_id: str,
    rating: int,
    comment: str | None = None,
    job_id: str | None = None,
    is_public: bool = True,
) -> Result[Review]:
    if not 1 <= rating <= 5:
        return Result.failure("Puan 1 ile 5 arasında olmalıdır", "validation")
    row = await client.insert(
        TABLE,
        {
            "reviewer_id": reviewer_id,
            "reviewee_id": reviewee_id,
            "job_id": job_id,
            "rating": rating,
            "comment": comment,
            "is_public": is_public,
            "created_at": utc_now_iso(),
        },
    )
    return Result.success(Review.model_validate(row))


@service_call("Kullanıcı yorumları alınamadı", default_factory=list)
async def list_testimonials(client: PlatformClient, limit: int = 3) -> Result[list[Review]]:
    rows = await client.select(
        TABLE,
        {"is_public": eq(True)},
        columns="*,reviewer:profiles!reviewer_id(first_name,last_name,user_type)",
        order="rating.desc",
        limit=limit,
    )
    return Result.success([Review.model_validate(r) for r in rows])
