import json
import os
import tempfile
import unittest

from app import create_app
from models import db
from models.user import USER_BLOCKED
from utils.errors import AuthenticationError, NotFoundError, ValidationError

TEST_CONFIG = {
    'TESTING': True,
    'SQLALCHEMY_DATABASE_URI': 'sqlite://',
    'SECRET_KEY': 'test-secret',
    'LOG_LEVEL': 'WARNING'
}

ADMIN_EMAIL = 'admin@example.com'
ADMIN_PASSWORD = 'secret1'


class AppTestCase(unittest.TestCase):
    """Fresh app on an in-memory database for every test"""

    def setUp(self):
        self.app = create_app(TEST_CONFIG)
        self.ctx = self.app.app_context()
        self.ctx.push()
        self.client = self.app.test_client()
        self.services = self.app.config['services']
        self.backend = self.app.config['backend']

    def tearDown(self):
        db.session.remove()
        db.drop_all()
        self.ctx.pop()

    def register_admin(self, email=ADMIN_EMAIL, password=ADMIN_PASSWORD, name='Admin'):
        return self.services['auth'].register(email, password, password, name, '08123456789')

    def login(self, email=ADMIN_EMAIL, password=ADMIN_PASSWORD):
        return self.client.post('/auth/login', json={'email': email, 'password': password})


class AuthTest(AppTestCase):
    def test_register_and_login(self):
        response = self.client.post('/auth/register', json={
            'email': ADMIN_EMAIL,
            'password': ADMIN_PASSWORD,
            'confirm_password': ADMIN_PASSWORD,
            'name': 'Admin'
        })
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json['admin']['role'], 'admin')
        self.assertNotIn('password_hash', response.json['admin'])

        response = self.login()
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json['admin']['email'], ADMIN_EMAIL)

        response = self.client.get('/auth/me')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json['admin']['name'], 'Admin')

    def test_register_validation_codes(self):
        auth = self.services['auth']
        cases = [
            (('a@b.co', 'secret1', 'secret2', 'A'), 'password-mismatch'),
            (('a@b.co', '123', '123', 'A'), 'weak-password'),
            (('a@b.co', 'secret1', 'secret1', '  '), 'name-required'),
            (('not-an-email', 'secret1', 'secret1', 'A'), 'invalid-email'),
        ]
        for args, code in cases:
            with self.assertRaises(ValidationError) as raised:
                auth.register(*args)
            self.assertEqual(raised.exception.code, code)

    def test_email_already_in_use(self):
        self.register_admin()

        response = self.client.post('/auth/register', json={
            'email': 'ADMIN@example.com',
            'password': ADMIN_PASSWORD,
            'confirm_password': ADMIN_PASSWORD,
            'name': 'Other'
        })

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json['code'], 'email-already-in-use')

    def test_login_error_codes(self):
        self.register_admin()
        self.backend.admins.add(email='user@example.com', name='User', role='user',
                                password_hash=self.backend.admins.find_by_email(ADMIN_EMAIL).password_hash)

        cases = [
            ('nope', ADMIN_PASSWORD, 'invalid-email'),
            ('ghost@example.com', ADMIN_PASSWORD, 'user-not-found'),
            (ADMIN_EMAIL, 'wrong-one', 'wrong-password'),
            ('user@example.com', ADMIN_PASSWORD, 'not-admin'),
        ]
        for email, password, code in cases:
            response = self.login(email, password)
            self.assertEqual(response.status_code, 401, msg=code)
            self.assertEqual(response.json['code'], code)

        with self.assertRaises(AuthenticationError):
            self.services['auth'].login(ADMIN_EMAIL, 'wrong-one')

    def test_register_rejects_non_text_values(self):
        base = {'email': ADMIN_EMAIL, 'password': ADMIN_PASSWORD, 'confirm_password': ADMIN_PASSWORD, 'name': 'Admin'}
        cases = [
            ({'password': 1234567, 'confirm_password': 1234567}, 'weak-password'),
            ({'name': 5}, 'name-required'),
            ({'email': 42}, 'invalid-email'),
            ({'phone': 8123}, 'invalid-phone'),
        ]
        for changes, code in cases:
            response = self.client.post('/auth/register', json={**base, **changes})
            self.assertEqual(response.status_code, 400, msg=code)
            self.assertEqual(response.json['code'], code)

    def test_login_with_non_text_password(self):
        self.register_admin()

        response = self.login(ADMIN_EMAIL, 1234567)

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json['code'], 'wrong-password')

    def test_logout_ends_session(self):
        self.register_admin()
        self.login()

        self.client.post('/auth/logout')

        self.assertEqual(self.client.get('/auth/me').status_code, 401)


class SpotsTest(AppTestCase):
    def setUp(self):
        super().setUp()
        self.register_admin()
        self.login()

    def test_add_spot(self):
        response = self.client.post('/spots/', json={
            'category': 'Jalan Berlubang',
            'title': 'Lubang di Jl. Sudirman',
            'description': 'Cukup dalam',
            'latitude': -6.2,
            'longitude': 106.816
        })

        self.assertEqual(response.status_code, 201)
        spot = response.json['spot']
        self.assertEqual(spot['status'], 'belum_diperbaiki')
        self.assertEqual(spot['status_label'], 'Belum Diperbaiki')

        spots = self.client.get('/spots/').json['spots']
        self.assertEqual([s['title'] for s in spots], ['Lubang di Jl. Sudirman'])

    def test_add_spot_validation(self):
        cases = [
            ({'title': 'X', 'latitude': 0, 'longitude': 0}, 'location-required'),
            ({'title': 'X', 'latitude': None, 'longitude': 106.8}, 'location-required'),
            ({'title': 'X', 'latitude': 95, 'longitude': 106.8}, 'invalid-coordinates'),
            ({'title': ' ', 'latitude': -6.2, 'longitude': 106.8}, 'title-required'),
        ]
        for payload, code in cases:
            response = self.client.post('/spots/', json=payload)
            self.assertEqual(response.status_code, 400, msg=code)
            self.assertEqual(response.json['code'], code)

        self.assertEqual(self.services['spots'].list_spots(), [])

    def test_add_spot_rejects_non_text_values(self):
        base = {'title': 'Lubang', 'latitude': -6.2, 'longitude': 106.816}
        cases = [
            ({'title': 5}, 'title-required'),
            ({'category': 3}, 'invalid-field'),
            ({'description': {'text': 'dalam'}}, 'invalid-field'),
        ]
        for changes, code in cases:
            response = self.client.post('/spots/', json={**base, **changes})
            self.assertEqual(response.status_code, 400, msg=code)
            self.assertEqual(response.json['code'], code)

    def test_statistics(self):
        spots = self.services['spots']
        spots.add_spot('Jalan Berlubang', 'A', '', -6.2, 106.8)
        spots.add_spot('Jalan Berlubang', 'B', '', -6.3, 106.8)
        spots.add_spot('', 'C', '', -6.4, 106.8)
        repaired = self.backend.spots.find_all()[0]
        self.backend.spots.update(repaired, status='sudah_diperbaiki')

        stats = self.client.get('/spots/stats').json

        self.assertEqual(stats['total'], 3)
        self.assertEqual(stats['by_status'], {
            'Belum Diperbaiki': 2,
            'Sedang Diperbaiki': 0,
            'Sudah Diperbaiki': 1
        })
        self.assertEqual(stats['by_category'], {'Jalan Berlubang': 2, 'Tidak Dikategorikan': 1})


class UsersTest(AppTestCase):
    def setUp(self):
        super().setUp()
        self.register_admin()
        self.login()
        self.user = self.backend.users.add(id='u1', name='Budi', email='budi@example.com')

    def test_list_users(self):
        users = self.client.get('/users/').json['users']

        self.assertEqual([u['id'] for u in users], ['u1'])
        self.assertEqual(users[0]['status'], 'active')

    def test_block_user_is_idempotent(self):
        response = self.client.post('/users/u1/block')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json['user']['status'], USER_BLOCKED)

        response = self.client.post('/users/u1/block')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json['user']['status'], USER_BLOCKED)

    def test_block_unknown_user(self):
        self.assertEqual(self.client.post('/users/missing/block').status_code, 404)
        with self.assertRaises(NotFoundError):
            self.services['users'].block_user('missing')


class ProfileTest(AppTestCase):
    def setUp(self):
        super().setUp()
        self.admin = self.register_admin()
        self.login()

    def test_get_profile(self):
        profile = self.client.get('/profile/').json['profile']

        self.assertEqual(profile['uid'], self.admin['uid'])
        self.assertEqual(profile['no_phone'], '08123456789')

    def test_update_profile(self):
        response = self.client.put('/profile/', json={'name': 'Admin Baru', 'no_phone': '0811'})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json['profile']['name'], 'Admin Baru')
        self.assertEqual(response.json['profile']['no_phone'], '0811')
        self.assertEqual(response.json['profile']['email'], ADMIN_EMAIL)

    def test_update_profile_validation(self):
        self.register_admin(email='other@example.com')

        response = self.client.put('/profile/', json={'email': 'other@example.com'})
        self.assertEqual(response.json['code'], 'email-already-in-use')

        response = self.client.put('/profile/', json={'email': 'broken'})
        self.assertEqual(response.json['code'], 'invalid-email')

        response = self.client.put('/profile/', json={'name': ''})
        self.assertEqual(response.json['code'], 'name-required')

        # Keeping one's own address is fine
        response = self.client.put('/profile/', json={'email': ADMIN_EMAIL})
        self.assertEqual(response.status_code, 200)

    def test_update_profile_rejects_non_text_values(self):
        response = self.client.put('/profile/', json={'name': 7})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json['code'], 'name-required')

        response = self.client.put('/profile/', json={'no_phone': 811})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json['code'], 'invalid-phone')


class DashboardTest(AppTestCase):
    def test_health_needs_no_login(self):
        response = self.client.get('/health')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json['status'], 'healthy')

    def test_protected_pages_need_login(self):
        for path in ('/', '/map', '/spots/', '/users/', '/profile/'):
            self.assertEqual(self.client.get(path).status_code, 401, msg=path)

    def test_dashboard_summary(self):
        self.register_admin()
        self.login()
        reports = self.services['reports']
        reports.create_report({'id': '1', 'latitude': -6.2000, 'longitude': 106.8160})
        reports.create_report({'id': '2', 'latitude': -6.2001, 'longitude': 106.8161})
        reports.apply_action('2', 'verify')

        data = self.client.get('/').json

        self.assertEqual(data['clusters'], 1)
        self.assertEqual(data['reports'], {'Menunggu Verifikasi': 1, 'Dalam Proses': 1})
        self.assertEqual(data['spots']['total'], 0)

    def test_map_renders_html(self):
        self.register_admin()
        self.login()
        self.services['spots'].add_spot('Jalan Berlubang', 'A', '', -6.2, 106.8)
        self.services['reports'].create_report({'id': '1', 'latitude': -6.2000, 'longitude': 106.8160})
        self.services['reports'].create_report({'id': '2', 'latitude': -6.2001, 'longitude': 106.8161})

        response = self.client.get('/map')

        self.assertEqual(response.status_code, 200)
        self.assertIn(b'leaflet', response.data)

    def test_unknown_route_is_json(self):
        response = self.client.get('/nowhere')

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json['status'], 'error')


class CommandsTest(AppTestCase):
    def setUp(self):
        super().setUp()
        self.runner = self.app.test_cli_runner()

    def test_import_reports(self):
        documents = [
            {'id': '1', 'latitude': -6.2000, 'longitude': 106.8160, 'status': 'Menunggu Verifikasi'},
            {'id': '2', 'latitude': '-6.2001', 'longitude': '106.8161', 'timestamp': {'seconds': 1714550400}},
            {'id': '3', 'timestamp': 'not a date'},
        ]
        with tempfile.NamedTemporaryFile('w', suffix='.json', delete=False) as f:
            json.dump(documents, f)
        self.addCleanup(os.remove, f.name)

        result = self.runner.invoke(args=['import-reports', f.name])

        self.assertEqual(result.exit_code, 0)
        self.assertIn('Imported 2 of 3 reports', result.output)
        self.assertEqual(sorted(r['id'] for r in self.services['reports'].list_reports()), ['1', '2'])

    def test_import_skips_malformed_documents(self):
        documents = [
            {'id': '1', 'latitude': -6.2000, 'longitude': 106.8160},
            'not a report',
            {'id': 'x', 'timestamp': {'seconds': 'x'}},
            {'id': 'y', 'timestamp': {'seconds': 10 ** 20}},
            {'id': 'z', 'description': 12},
            {'id': '2', 'latitude': -6.2001, 'longitude': 106.8161},
        ]
        with tempfile.NamedTemporaryFile('w', suffix='.json', delete=False) as f:
            json.dump(documents, f)
        self.addCleanup(os.remove, f.name)

        result = self.runner.invoke(args=['import-reports', f.name])

        self.assertEqual(result.exit_code, 0)
        self.assertIn('Imported 2 of 6 reports', result.output)
        self.assertEqual(sorted(r['id'] for r in self.services['reports'].list_reports()), ['1', '2'])

    def test_import_requires_a_list(self):
        with tempfile.NamedTemporaryFile('w', suffix='.json', delete=False) as f:
            json.dump({'id': '1'}, f)
        self.addCleanup(os.remove, f.name)

        result = self.runner.invoke(args=['import-reports', f.name])

        self.assertNotEqual(result.exit_code, 0)
        self.assertEqual(self.services['reports'].list_reports(), [])

    def test_clusters_command(self):
        result = self.runner.invoke(args=['clusters'])
        self.assertIn('No clusters found', result.output)

        reports = self.services['reports']
        reports.create_report({'id': '1', 'latitude': -6.2000, 'longitude': 106.8160, 'location': 'Jl. Sudirman'})
        reports.create_report({'id': '2', 'latitude': -6.2001, 'longitude': 106.8161})

        result = self.runner.invoke(args=['clusters', '--radius', '50'])
        self.assertEqual(result.exit_code, 0)
        self.assertIn('2 reports', result.output)

        result = self.runner.invoke(args=['clusters', '--radius', '0'])
        self.assertNotEqual(result.exit_code, 0)

    def test_reset_db(self):
        self.services['reports'].create_report({'id': '1'})

        result = self.runner.invoke(args=['reset-db'])

        self.assertIn('Database reset successfully!', result.output)
        self.assertEqual(self.services['reports'].list_reports(), [])


if __name__ == '__main__':
    unittest.main()
