from app.models.rating import Rating
from app.models.store import Store
from app.models.user import User, Role


class TestUserRoutes:

    def test_admin_lists_users(self, client, admin, user, owner, headers_for):
        r = client.get("/api/users", headers=headers_for(admin))
        assert r.status_code == 200
        emails = {u["email"] for u in r.json()}
        assert {admin.email, user.email, owner.email} <= emails
        assert all("password" not in u for u in r.json())

    def test_admin_creates_store_owner(self, client, admin, headers_for):
        r = client.post("/api/users", headers=headers_for(admin), json={
            "name": "Penelope Hargreaves-Lyon",
            "email": "penny@example.com",
            "address": "1 Quay Street",
            "password": "Owner#2024",
            "confirmPassword": "Owner#2024",
            "role": "store_owner",
        })
        assert r.status_code == 201
        assert r.json()["role"] == "store_owner"

    def test_non_admin_cannot_create_users(self, client, owner, headers_for):
        r = client.post("/api/users", headers=headers_for(owner), json={})
        assert r.status_code == 403

    def test_user_reads_self(self, client, user, headers_for):
        r = client.get(f"/api/users/{user.id}", headers=headers_for(user))
        assert r.status_code == 200
        assert r.json()["id"] == user.id

    def test_user_cannot_read_others(self, client, user, owner, headers_for):
        r = client.get(f"/api/users/{owner.id}", headers=headers_for(user))
        assert r.status_code == 403

    def test_admin_reads_anyone(self, client, admin, user, headers_for):
        assert client.get(f"/api/users/{user.id}", headers=headers_for(admin)).status_code == 200

    def test_missing_user(self, client, admin, headers_for):
        r = client.get("/api/users/9999", headers=headers_for(admin))
        assert r.status_code == 404
        assert r.json()["message"] == "User not found"


class TestUserCascadeDelete:

    def test_deletes_everything_referencing_the_user(self, client, db, admin, owner, make_user,
                                                     make_store, make_rating, headers_for):
        raters = [make_user(Role.USER) for _ in range(3)]
        first, second = make_store(owner), make_store(owner)
        make_rating(raters[0], first, 5)
        make_rating(raters[1], first, 3)
        make_rating(raters[2], first, 4)
        make_rating(raters[0], second, 2)
        make_rating(raters[1], second, 1)
        # the owner also rated someone else's store
        elsewhere = make_store(admin)
        make_rating(owner, elsewhere, 4)
        store_ids = [first.id, second.id]
        owner_id = owner.id

        r = client.delete(f"/api/users/{owner_id}", headers=headers_for(admin))
        assert r.status_code == 204

        db.expire_all()
        assert db.get(User, owner_id) is None
        assert db.query(Store).filter(Store.owner_id == owner_id).count() == 0
        assert db.query(Store).filter(Store.id.in_(store_ids)).count() == 0
        assert db.query(Rating).filter(Rating.user_id == owner_id).count() == 0
        assert db.query(Rating).filter(Rating.store_id.in_(store_ids)).count() == 0
        # unrelated rows survive
        assert db.get(Store, elsewhere.id) is not None
        assert all(db.get(User, u.id) is not None for u in raters)

    def test_only_admin_may_delete(self, client, user, owner, headers_for):
        assert client.delete(f"/api/users/{owner.id}", headers=headers_for(user)).status_code == 403
        assert client.delete(f"/api/users/{owner.id}", headers=headers_for(owner)).status_code == 403

    def test_delete_missing_user(self, client, admin, headers_for):
        assert client.delete("/api/users/4242", headers=headers_for(admin)).status_code == 404
