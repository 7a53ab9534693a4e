def _routine(client, headers, name="Stretch"):
    r = client.post("/routines/", json={"task_name": name, "start_time": "7:00 AM", "end_time": "7:15 AM"}, headers=headers)
    return r.json()


def test_create_and_list_with_embedded_routine(client, register):
    headers = register()
    routine = _routine(client, headers)
    r = client.post("/schedule/", json={"routineId": routine["id"], "dayOfWeek": 3}, headers=headers)
    assert r.status_code == 200
    body = r.json()
    assert body["day_of_week"] == 3
    assert body["routine_id"] == routine["id"]
    listed = client.get("/schedule/", headers=headers).json()
    assert len(listed) == 1
    assert listed[0]["routine"]["task_name"] == "Stretch"


def test_day_of_week_must_be_in_range(client, register):
    headers = register()
    routine = _routine(client, headers)
    for day in (-1, 7):
        r = client.post("/schedule/", json={"routine_id": routine["id"], "day_of_week": day}, headers=headers)
        assert r.status_code == 400
    r = client.post("/schedule/", json={"routine_id": routine["id"]}, headers=headers)
    assert r.status_code == 400


def test_duplicate_day_returns_existing(client, register):
    headers = register()
    routine = _routine(client, headers)
    first = client.post("/schedule/", json={"routine_id": routine["id"], "day_of_week": 0}, headers=headers).json()
    second = client.post("/schedule/", json={"routine_id": routine["id"], "day_of_week": 0}, headers=headers).json()
    assert first["id"] == second["id"]
    assert len(client.get("/schedule/", headers=headers).json()) == 1


def test_filter_by_day(client, register):
    headers = register()
    routine = _routine(client, headers)
    for day in (1, 2, 3):
        client.post("/schedule/", json={"routine_id": routine["id"], "day_of_week": day}, headers=headers)
    listed = client.get("/schedule/?day_of_week=2", headers=headers).json()
    assert [s["day_of_week"] for s in listed] == [2]


def test_cannot_schedule_or_delete_for_another_user(client, register):
    alice = register("alice")
    bob = register("bob")
    routine = _routine(client, alice)
    r = client.post("/schedule/", json={"routine_id": routine["id"], "day_of_week": 1}, headers=bob)
    assert r.status_code == 401
    schedule = client.post("/schedule/", json={"routine_id": routine["id"], "day_of_week": 1}, headers=alice).json()
    assert client.delete(f"/schedule/{schedule['id']}", headers=bob).status_code == 401
    assert client.get("/schedule/", headers=bob).json() == []
    assert client.delete(f"/schedule/{schedule['id']}", headers=alice).status_code == 200
    assert client.delete(f"/schedule/{schedule['id']}", headers=alice).status_code == 404


def test_unknown_routine_is_not_found(client, register):
    headers = register()
    r = client.post("/schedule/", json={"routine_id": 404, "day_of_week": 1}, headers=headers)
    assert r.status_code == 404
