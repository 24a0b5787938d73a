import json
from datetime import datetime, date, timedelta, timezone as dt_timezone
from uuid import uuid4
from django.test import TestCase, Client
from django.contrib.auth import get_user_model
from django.utils import timezone

from .dtos import TaskDTO
from .models import Task, TaskStatus
from .schemas import TaskIn, TaskUpdate
from .tree import build_task_tree
from . import services

User = get_user_model()

DUE = datetime(2024, 6, 1, 12, tzinfo=dt_timezone.utc)


def _dto(parent_id=None, title="t"):
    return TaskDTO(id=uuid4(), title=title, description="", due_date=DUE,
                   status=TaskStatus.PENDING, parent_id=parent_id)


class BuildTaskTreeTest(TestCase):
    def test_nests_children_in_input_order(self):
        root = _dto(title="root")
        a = _dto(parent_id=root.id, title="a")
        b = _dto(parent_id=root.id, title="b")
        grandchild = _dto(parent_id=a.id, title="a1")

        tree = build_task_tree([root, a, grandchild, b])

        self.assertEqual(len(tree), 1)
        self.assertEqual([n.title for n in tree[0].children], ["a", "b"])
        self.assertEqual([n.title for n in tree[0].children[0].children], ["a1"])

    def test_orphans_become_roots(self):
        orphan = _dto(parent_id=uuid4(), title="orphan")
        plain = _dto(title="plain")
        tree = build_task_tree([orphan, plain])
        self.assertEqual([n.title for n in tree], ["orphan", "plain"])

    def test_child_listed_before_parent(self):
        parent = _dto(title="parent")
        child = _dto(parent_id=parent.id, title="child")
        tree = build_task_tree([child, parent])
        self.assertEqual([n.title for n in tree], ["parent"])
        self.assertEqual(tree[0].children[0].title, "child")

    def test_empty(self):
        self.assertEqual(build_task_tree([]), [])


class TaskServiceTest(TestCase):
    def test_parent_cannot_be_descendant(self):
        root = services.create_task(TaskIn(title="root", due_date=DUE))
        child = services.create_task(TaskIn(title="child", due_date=DUE, parent_id=root.id))

        with self.assertRaises(ValueError):
            services.update_task(root.id, TaskUpdate(parent_id=child.id))
        with self.assertRaises(ValueError):
            services.update_task(root.id, TaskUpdate(parent_id=root.id))

    def test_unknown_parent_rejected(self):
        with self.assertRaises(ValueError):
            services.create_task(TaskIn(title="x", due_date=DUE, parent_id=uuid4()))

    def test_delete_removes_subtasks(self):
        root = services.create_task(TaskIn(title="root", due_date=DUE))
        child = services.create_task(TaskIn(title="child", due_date=DUE, parent_id=root.id))
        services.create_task(TaskIn(title="grandchild", due_date=DUE, parent_id=child.id))

        self.assertTrue(services.delete_task(root.id))
        self.assertEqual(Task.objects.count(), 0)

    def test_notification_tasks(self):
        now = timezone.now()
        services.create_task(TaskIn(title="late", due_date=now - timedelta(days=2)))
        services.create_task(TaskIn(title="today", due_date=now))
        services.create_task(TaskIn(title="done", due_date=now - timedelta(days=1), status=TaskStatus.DONE))
        services.create_task(TaskIn(title="future", due_date=now + timedelta(days=3)))

        titles = {t.title for t in services.get_notification_tasks()}
        self.assertEqual(titles, {"late", "today"})

    def test_notification_tasks_for_given_day(self):
        services.create_task(TaskIn(title="june", due_date=DUE))
        self.assertEqual(services.get_notification_tasks(date(2024, 5, 30)), [])
        self.assertEqual(len(services.get_notification_tasks(date(2024, 6, 2))), 1)


class TaskAPITest(TestCase):
    def setUp(self):
        self.client = Client()
        self.user = User.objects.create_user(username='a@test.com', email='a@test.com', password='pw')

    def test_requires_auth(self):
        self.assertEqual(self.client.get('/api/tasks').status_code, 401)

    def test_tree_endpoint(self):
        self.client.force_login(self.user)
        response = self.client.post(
            '/api/tasks',
            data=json.dumps({'title': 'root', 'due_date': '2024-06-01T12:00:00Z'}),
            content_type='application/json',
        )
        root_id = response.json()['id']
        self.assertEqual(response.json()['user_id'], str(self.user.id))
        self.client.post(
            '/api/tasks',
            data=json.dumps({'title': 'child', 'due_date': '2024-06-02T12:00:00Z', 'parent_id': root_id}),
            content_type='application/json',
        )

        tree = self.client.get('/api/tasks/tree').json()
        self.assertEqual(len(tree), 1)
        self.assertEqual(tree[0]['children'][0]['title'], 'child')
        self.assertEqual(len(self.client.get('/api/tasks').json()), 2)
