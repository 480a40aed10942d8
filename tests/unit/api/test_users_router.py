import httpx


class TestRegisterAndLogin:
    async def test_register_then_login(self, client: httpx.AsyncClient) -> None:
        registered = await client.post(
            "/users/register",
            json={"email": "amy@robomate.co.nz", "password": "pw"},
        )
        assert registered.status_code == 201
        assert registered.json() == {"email": "amy@robomate.co.nz", "isAdmin": False}

        login = await client.post(
            "/users/login", json={"email": "AMY@robomate.co.nz", "password": "pw"}
        )
        assert login.status_code == 200

    async def test_register_outside_domain(self, client: httpx.AsyncClient) -> None:
        resp = await client.post(
            "/users/register", json={"email": "amy@gmail.com", "password": "pw"}
        )

        assert resp.status_code == 400
        assert "@robomate.co.nz" in resp.json()["detail"]

    async def test_login_wrong_password(self, client: httpx.AsyncClient) -> None:
        resp = await client.post(
            "/users/login",
            json={"email": "jeff@robomate.co.nz", "password": "wrong"},
        )

        assert resp.status_code == 401
        assert resp.json()["detail"] == "Invalid credentials."


class TestAdministration:
    async def test_admin_lists_users(
        self,
        client: httpx.AsyncClient,
        admin_header: dict[str, str],
        tech_header: dict[str, str],
    ) -> None:
        resp = await client.get("/users", headers=admin_header)

        assert [u["email"] for u in resp.json()] == [
            "jeff@robomate.co.nz",
            "sang@robomate.co.nz",
        ]

    async def test_technician_sees_nobody(
        self, client: httpx.AsyncClient, tech_header: dict[str, str]
    ) -> None:
        resp = await client.get("/users", headers=tech_header)

        assert resp.json() == []

    async def test_reset_password(
        self,
        client: httpx.AsyncClient,
        admin_header: dict[str, str],
        tech_header: dict[str, str],
    ) -> None:
        resp = await client.put(
            "/users/sang@robomate.co.nz/password",
            json={"newPassword": "fresh"},
            headers=admin_header,
        )

        assert resp.status_code == 204
        old = await client.get("/users", headers=tech_header)
        assert old.status_code == 401
