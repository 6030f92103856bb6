"""Job API tests — posting, reading, searching, editing, deleting.

Learn: Ownership is the interesting part. The route gate lets every
RECRUITER through to PUT/DELETE; the service then compares the job's
owner with the caller, so a second recruiter gets 403 while the owner
and any ADMIN succeed.
"""

import pytest
from sqlalchemy import select

from conftest import job_body, post_job, register
from talentflow.db.models import Application, JobSkill, User


# ═══════════════════════════════════════════════════════════
# Create + read
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_create_job(client, recruiter):
    r = await client.post("/api/jobs", json=job_body(), headers=recruiter.headers)
    assert r.status_code == 201
    body = r.json()
    assert body["success"] is True
    assert body["message"] == "Job created successfully"

    job = body["data"]
    assert job["title"] == "Backend Engineer"
    assert job["status"] == "OPEN"
    assert job["employmentType"] == "FULL_TIME"
    assert job["requiredSkills"] == ["Python", "SQL"]
    assert job["postedById"] == recruiter.id
    assert job["postedBy"] == "Recruiter User"
    assert job["createdAt"]


@pytest.mark.asyncio
async def test_admin_can_post_jobs(client, admin):
    job = await post_job(client, admin)
    assert job["postedById"] == admin.id


@pytest.mark.asyncio
async def test_skill_order_is_preserved(client, recruiter):
    job = await post_job(client, recruiter, requiredSkills=["Rust", "Go", "C"])
    r = await client.get(f"/api/jobs/{job['id']}")
    assert r.json()["data"]["requiredSkills"] == ["Rust", "Go", "C"]


@pytest.mark.asyncio
async def test_get_job_is_public_and_repeatable(client, job):
    r1 = await client.get(f"/api/jobs/{job['id']}")
    r2 = await client.get(f"/api/jobs/{job['id']}")
    assert r1.status_code == r2.status_code == 200
    assert r1.json() == r2.json()
    assert r1.json()["data"]["id"] == job["id"]


@pytest.mark.asyncio
async def test_get_missing_job(client):
    r = await client.get("/api/jobs/9999")
    assert r.status_code == 404
    assert r.json() == {"success": False, "message": "Job not found with id: 9999", "data": None}


@pytest.mark.asyncio
async def test_deactivated_recruiter_cannot_post(client, db_session, recruiter):
    user = await db_session.get(User, recruiter.id)
    user.is_active = False
    await db_session.commit()

    r = await client.post("/api/jobs", json=job_body(), headers=recruiter.headers)
    assert r.status_code == 403


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides,field",
    [
        ({"title": "ab"}, "title"),
        ({"description": "too short"}, "description"),
        ({"location": "   "}, "location"),
        ({"employmentType": "SEASONAL"}, "employmentType"),
        ({"requiredSkills": []}, "requiredSkills"),
        ({"requiredSkills": ["  ", ""]}, "requiredSkills"),
        ({"experienceLevel": ""}, "experienceLevel"),
    ],
)
async def test_create_job_validation(client, recruiter, overrides, field):
    r = await client.post("/api/jobs", json=job_body(**overrides), headers=recruiter.headers)
    assert r.status_code == 400
    body = r.json()
    assert body["message"] == "Validation failed"
    assert field in body["errors"]


# ═══════════════════════════════════════════════════════════
# Listing + pagination
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_list_jobs_newest_first(client, recruiter):
    first = await post_job(client, recruiter, title="First Job")
    second = await post_job(client, recruiter, title="Second Job")

    r = await client.get("/api/jobs")
    assert r.status_code == 200
    page = r.json()["data"]
    ids = [j["id"] for j in page["content"]]
    assert ids == [second["id"], first["id"]]
    assert page["totalElements"] == 2
    assert page["page"] == 0
    assert page["size"] == 10
    assert page["first"] is True
    assert page["last"] is True


@pytest.mark.asyncio
async def test_list_jobs_pagination(client, recruiter):
    for i in range(5):
        await post_job(client, recruiter, title=f"Job number {i}")

    r = await client.get("/api/jobs", params={"page": 1, "size": 2, "sortBy": "title", "sortDir": "ASC"})
    page = r.json()["data"]
    assert [j["title"] for j in page["content"]] == ["Job number 2", "Job number 3"]
    assert page["totalElements"] == 5
    assert page["totalPages"] == 3
    assert page["first"] is False
    assert page["last"] is False

    r = await client.get("/api/jobs", params={"page": 2, "size": 2, "sortBy": "title", "sortDir": "ASC"})
    page = r.json()["data"]
    assert [j["title"] for j in page["content"]] == ["Job number 4"]
    assert page["last"] is True


@pytest.mark.asyncio
async def test_sort_direction(client, recruiter):
    for title in ("Charlie role", "Alpha role", "Bravo role"):
        await post_job(client, recruiter, title=title)

    asc = await client.get("/api/jobs", params={"sortBy": "title", "sortDir": "ASC"})
    desc = await client.get("/api/jobs", params={"sortBy": "title", "sortDir": "DESC"})
    asc_titles = [j["title"] for j in asc.json()["data"]["content"]]
    desc_titles = [j["title"] for j in desc.json()["data"]["content"]]
    assert asc_titles == ["Alpha role", "Bravo role", "Charlie role"]
    assert desc_titles == list(reversed(asc_titles))


@pytest.mark.asyncio
async def test_unknown_sort_column(client, job):
    r = await client.get("/api/jobs", params={"sortBy": "passwordHash"})
    assert r.status_code == 400
    assert r.json()["message"].startswith("Cannot sort by 'passwordHash'")


@pytest.mark.asyncio
async def test_page_size_bounds(client):
    r = await client.get("/api/jobs", params={"size": 0})
    assert r.status_code == 400
    r = await client.get("/api/jobs", params={"page": -1})
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_empty_listing(client):
    r = await client.get("/api/jobs")
    page = r.json()["data"]
    assert page["content"] == []
    assert page["totalElements"] == 0
    assert page["totalPages"] == 0


# ═══════════════════════════════════════════════════════════
# Search
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_search_filters(client, recruiter, db_session):
    berlin_py = await post_job(client, recruiter, location="Berlin, Germany", requiredSkills=["Python"])
    remote_go = await post_job(client, recruiter, location="Remote", requiredSkills=["Go", "Python"])
    paris_java = await post_job(client, recruiter, location="Paris, France", requiredSkills=["Java"])

    async def search(**params):
        r = await client.get("/api/jobs/search", params=params)
        assert r.status_code == 200, r.text
        return {j["id"] for j in r.json()["data"]["content"]}

    assert await search(skill="Python") == {berlin_py["id"], remote_go["id"]}
    assert await search(skill="python") == set()
    assert await search(location="BERLIN") == {berlin_py["id"]}
    assert await search(location="EMOT") == {remote_go["id"]}
    assert await search(skill="Python", location="remote") == {remote_go["id"]}
    assert await search() == {berlin_py["id"], remote_go["id"], paris_java["id"]}
    assert await search(status="OPEN") == {berlin_py["id"], remote_go["id"], paris_java["id"]}
    assert await search(status="CLOSED") == set()


@pytest.mark.asyncio
async def test_search_location_wildcards_are_literal(client, recruiter):
    await post_job(client, recruiter, location="Berlin")
    r = await client.get("/api/jobs/search", params={"location": "%"})
    assert r.json()["data"]["content"] == []


@pytest.mark.asyncio
async def test_search_rejects_unknown_status(client):
    r = await client.get("/api/jobs/search", params={"status": "ARCHIVED"})
    assert r.status_code == 400
    assert "status" in r.json()["errors"]


# ═══════════════════════════════════════════════════════════
# Update
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_owner_updates_job(client, recruiter, job):
    r = await client.put(
        f"/api/jobs/{job['id']}",
        json=job_body(title="Staff Engineer", requiredSkills=["Kotlin"], employmentType="CONTRACT"),
        headers=recruiter.headers,
    )
    assert r.status_code == 200
    updated = r.json()["data"]
    assert updated["title"] == "Staff Engineer"
    assert updated["requiredSkills"] == ["Kotlin"]
    assert updated["employmentType"] == "CONTRACT"
    assert updated["postedById"] == recruiter.id
    assert updated["createdAt"] == job["createdAt"]
    assert updated["status"] == "OPEN"


@pytest.mark.asyncio
async def test_update_replaces_skill_rows(client, recruiter, job, db_session):
    await client.put(
        f"/api/jobs/{job['id']}",
        json=job_body(requiredSkills=["SQL", "Python", "Docker"]),
        headers=recruiter.headers,
    )
    rows = (
        await db_session.execute(
            select(JobSkill.skill).where(JobSkill.job_id == job["id"]).order_by(JobSkill.position)
        )
    ).scalars().all()
    assert rows == ["SQL", "Python", "Docker"]


@pytest.mark.asyncio
async def test_other_recruiter_cannot_update(client, other_recruiter, job):
    r = await client.put(
        f"/api/jobs/{job['id']}", json=job_body(title="Hijacked"), headers=other_recruiter.headers
    )
    assert r.status_code == 403
    assert r.json()["message"] == "You can only update your own jobs"

    r = await client.get(f"/api/jobs/{job['id']}")
    assert r.json()["data"]["title"] == "Backend Engineer"


@pytest.mark.asyncio
async def test_admin_updates_any_job(client, admin, recruiter, job):
    r = await client.put(
        f"/api/jobs/{job['id']}", json=job_body(title="Edited by admin"), headers=admin.headers
    )
    assert r.status_code == 200
    assert r.json()["data"]["title"] == "Edited by admin"
    assert r.json()["data"]["postedById"] == recruiter.id


@pytest.mark.asyncio
async def test_update_missing_job(client, recruiter):
    r = await client.put("/api/jobs/424242", json=job_body(), headers=recruiter.headers)
    assert r.status_code == 404


# ═══════════════════════════════════════════════════════════
# Delete
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_other_recruiter_cannot_delete(client, other_recruiter, job):
    r = await client.delete(f"/api/jobs/{job['id']}", headers=other_recruiter.headers)
    assert r.status_code == 403
    assert r.json()["message"] == "You can only delete your own jobs"
    assert (await client.get(f"/api/jobs/{job['id']}")).status_code == 200


@pytest.mark.asyncio
async def test_owner_deletes_job(client, recruiter, job):
    r = await client.delete(f"/api/jobs/{job['id']}", headers=recruiter.headers)
    assert r.status_code == 200
    assert r.json() == {"success": True, "message": "Job deleted successfully", "data": None}
    assert (await client.get(f"/api/jobs/{job['id']}")).status_code == 404


@pytest.mark.asyncio
async def test_admin_deletes_any_job(client, admin, job):
    r = await client.delete(f"/api/jobs/{job['id']}", headers=admin.headers)
    assert r.status_code == 200


@pytest.mark.asyncio
async def test_delete_removes_applications(client, db_session, recruiter, candidate, job):
    other = await register(client, "CANDIDATE")
    for account in (candidate, other):
        r = await client.post(
            f"/api/applications/apply/{job['id']}",
            json={"resumeLink": "http://r"},
            headers=account.headers,
        )
        assert r.status_code == 201

    r = await client.delete(f"/api/jobs/{job['id']}", headers=recruiter.headers)
    assert r.status_code == 200

    remaining = (
        await db_session.execute(select(Application).where(Application.job_id == job["id"]))
    ).scalars().all()
    assert remaining == []
    skills = (
        await db_session.execute(select(JobSkill).where(JobSkill.job_id == job["id"]))
    ).scalars().all()
    assert skills == []

    r = await client.get("/api/applications/my", headers=candidate.headers)
    assert r.json()["data"] == []
