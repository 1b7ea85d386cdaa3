"""
Integration tests for the registry HTTP API.

These exercise the endpoints end to end: sign-up and login, bearer
credentials, the uniform result shape and status codes, ownership
checks and logo uploads.  The tests use Django REST Framework's
APIClient within the APITestCase base class.
"""
import shutil
import tempfile
import uuid

from django.urls import reverse
from rest_framework import status
from rest_framework.authtoken.models import Token
from rest_framework.test import APITestCase

from registry.models import Hmo, Hospital, InsurancePlan, User

PASSWORD = 'Str0ng-Passw0rd!'


class RegistryAPITests(APITestCase):
    def setUp(self) -> None:
        self.ada = User.objects.create_user(username='ada@example.com', email='ada@example.com',
                                            password=PASSWORD, name='Ada Obi')
        self.tunde = User.objects.create_user(username='tunde@example.com', email='tunde@example.com',
                                              password=PASSWORD, name='Tunde Bello')
        self.hospital = Hospital.objects.create(name='Lagos Island General', state='Lagos', admin=self.ada)

    def login_as(self, user):
        token, _ = Token.objects.get_or_create(user=user)
        self.client.credentials(HTTP_AUTHORIZATION=f'Token {token.key}')

    # -- auth ---------------------------------------------------------------

    def test_register_login_and_session(self):
        r = self.client.post(reverse('register_view'),
                             {'name': 'Chidi Nwosu', 'email': 'Chidi@Example.com', 'password': PASSWORD},
                             format='json')
        self.assertEqual(r.status_code, status.HTTP_201_CREATED)
        self.assertTrue(User.objects.filter(username='chidi@example.com', name='Chidi Nwosu').exists())

        r = self.client.post(reverse('login_view'), {'email': 'chidi@example.com', 'password': PASSWORD},
                             format='json')
        self.assertEqual(r.status_code, 200)
        data = r.data['data']
        self.assertTrue(data['token'] and data['jwt_access'] and data['jwt_refresh'])

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {data['jwt_access']}")
        r = self.client.get(reverse('session_view'))
        self.assertEqual(r.data['data']['user']['email'], 'chidi@example.com')
        self.assertEqual(r.data['data']['user']['name'], 'Chidi Nwosu')

    def test_register_rejects_duplicate_email(self):
        r = self.client.post(reverse('register_view'),
                             {'name': 'Ada Again', 'email': 'ada@example.com', 'password': PASSWORD},
                             format='json')
        self.assertEqual(r.status_code, 400)
        self.assertEqual(r.data['errors'][0]['field'], 'email')

    def test_login_with_wrong_password(self):
        r = self.client.post(reverse('login_view'), {'email': 'ada@example.com', 'password': 'wrong'},
                             format='json')
        self.assertEqual(r.status_code, 400)
        self.assertFalse(r.data['success'])
        self.assertEqual(r.data['errors'][0]['message'], 'Invalid email or password')

    def test_anonymous_session_is_null(self):
        r = self.client.get(reverse('session_view'))
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.data, {'success': True, 'data': None})

    def test_logout_blacklists_refresh_token(self):
        r = self.client.post(reverse('login_view'), {'email': 'ada@example.com', 'password': PASSWORD},
                             format='json')
        tokens = r.data['data']
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['jwt_access']}")
        r = self.client.post(reverse('jwt_logout_view'), {'refresh': tokens['jwt_refresh']}, format='json')
        self.assertEqual(r.data['data'], {'blacklisted': 1})
        self.assertFalse(Token.objects.filter(user=self.ada).exists())

        self.client.credentials()
        r = self.client.post(reverse('jwt_refresh_view'), {'refresh': tokens['jwt_refresh']}, format='json')
        self.assertEqual(r.status_code, 401)

    def test_invalid_token_uses_result_shape(self):
        self.client.credentials(HTTP_AUTHORIZATION='Token not-a-real-token')
        r = self.client.get(reverse('hospitals'))
        self.assertEqual(r.status_code, 401)
        self.assertEqual(r.data['success'], False)
        self.assertEqual(r.data['kind'], 'unauthorized')

    # -- hospitals ----------------------------------------------------------

    def test_anonymous_create_is_unauthorized(self):
        r = self.client.post(reverse('hospitals'), {'name': 'Nowhere'}, format='json')
        self.assertEqual(r.status_code, 401)
        self.assertEqual(r.data['errors'], [{'message': 'You must be logged in to create a hospital'}])

    def test_create_and_filter_hospitals(self):
        self.login_as(self.ada)
        r = self.client.post(reverse('hospitals'), {'name': 'Ikeja Medical Centre', 'state': 'Lagos'},
                             format='json')
        self.assertEqual(r.status_code, 201)
        self.assertEqual(r.data['data']['adminId'], self.ada.id)

        Hospital.objects.create(name='Garki District', state='FCT', admin=self.tunde)
        r = self.client.get(reverse('hospitals'), {'state': 'Lagos', 'limit': 1})
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.data['data']['total'], 2)
        self.assertEqual(len(r.data['data']['items']), 1)

        r = self.client.get(reverse('my_hospitals'))
        self.assertEqual(len(r.data['data']), 2)

    def test_form_encoded_payload(self):
        self.login_as(self.ada)
        r = self.client.post(reverse('hospitals'), {'name': 'Form Hospital', 'state': 'Oyo'})
        self.assertEqual(r.status_code, 201)
        self.assertEqual(r.data['data']['state'], 'Oyo')

    def test_malformed_json_uses_result_shape(self):
        self.login_as(self.ada)
        r = self.client.post(reverse('hospitals'), data='{"name": ', content_type='application/json')
        self.assertEqual(r.status_code, 400)
        self.assertEqual(r.data['success'], False)
        self.assertEqual(r.data['kind'], 'validation')

    def test_non_owner_cannot_change_hospital(self):
        self.login_as(self.tunde)
        url = reverse('hospital_detail', args=[self.hospital.pk])
        r = self.client.patch(url, {'name': 'Taken Over'}, format='json')
        self.assertEqual(r.status_code, 403)
        r = self.client.delete(url)
        self.assertEqual(r.status_code, 403)
        self.hospital.refresh_from_db()
        self.assertEqual(self.hospital.name, 'Lagos Island General')

    def test_unknown_ids_are_not_found(self):
        self.login_as(self.ada)
        for url in (reverse('hmo_detail', args=[uuid.uuid4()]), reverse('hmo_detail', args=['abc'])):
            r = self.client.get(url)
            self.assertEqual(r.status_code, 404)
            self.assertEqual(r.data['errors'][0]['message'], 'HMO not found')

    # -- hmos and plans -----------------------------------------------------

    def test_hmo_and_plan_lifecycle(self):
        self.login_as(self.tunde)
        r = self.client.post(reverse('hmos'), {'name': 'Hygeia', 'code': 'HYG',
                                               'hospitalId': str(self.hospital.pk)}, format='json')
        self.assertEqual(r.status_code, 201)
        hmo_id = r.data['data']['id']

        r = self.client.post(reverse('hmos'), {'name': 'Hygeia Clone', 'code': 'HYG'}, format='json')
        self.assertEqual(r.status_code, 400)
        self.assertEqual(r.data['errors'], [{'field': 'code', 'message': 'HMO code already exists'}])

        plan = {
            'hmoId': hmo_id, 'hospitalId': str(self.hospital.pk), 'name': 'Silver Family',
            'planType': 'family', 'durationYears': 2, 'monthlyCostCents': 1_500_000,
            'yearlyCostCents': 16_200_000, 'annualOutOfPocketLimitCents': 50_000_000,
            'annualMaxBenefitCents': 500_000_000,
        }
        r = self.client.post(reverse('plans'), plan, format='json')
        self.assertEqual(r.status_code, 201)
        plan_id = r.data['data']['id']

        r = self.client.post(reverse('plan_toggle_active', args=[plan_id]))
        self.assertEqual(r.status_code, 200)
        self.assertFalse(r.data['data']['isActive'])

        r = self.client.get(reverse('hmo_plans', args=[hmo_id]))
        self.assertEqual([p['id'] for p in r.data['data']], [plan_id])
        r = self.client.get(reverse('hospital_hmos', args=[self.hospital.pk]))
        self.assertEqual([h['id'] for h in r.data['data']], [hmo_id])

        r = self.client.get(reverse('plans'), {'isActive': 'false'})
        self.assertEqual(r.data['data']['total'], 1)

        r = self.client.delete(reverse('hmo_detail', args=[hmo_id]))
        self.assertEqual(r.status_code, 200)
        self.assertFalse(Hmo.objects.filter(pk=hmo_id).exists())
        self.assertFalse(InsurancePlan.objects.filter(pk=plan_id).exists())

    def test_plan_pricing_error_targets_field(self):
        hmo = Hmo.objects.create(name='Avon', created_by=self.ada)
        self.login_as(self.ada)
        r = self.client.post(reverse('plans'), {
            'hmoId': str(hmo.pk), 'hospitalId': str(self.hospital.pk), 'name': 'Cheap',
            'planType': 'individual', 'monthlyCostCents': 10_000, 'yearlyCostCents': 50_000,
            'annualOutOfPocketLimitCents': 0, 'annualMaxBenefitCents': 0,
        }, format='json')
        self.assertEqual(r.status_code, 400)
        self.assertEqual(r.data['errors'][0]['field'], 'yearlyCostCents')

    # -- uploads and ops ----------------------------------------------------

    def test_upload_logo(self):
        media = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, media, ignore_errors=True)
        self.login_as(self.ada)
        with self.settings(MEDIA_ROOT=media):
            r = self.client.post(reverse('upload_logo') + '?filename=Avon%20Logo.png',
                                 data=b'\x89PNG\r\n\x1a\nfake', content_type='image/png')
            self.assertEqual(r.status_code, 201)
            data = r.data['data']
            self.assertTrue(data['url'].startswith('http://testserver/media/logos/Avon_Logo-'))
            self.assertTrue(data['pathname'].endswith('.png'))
            self.assertEqual(data['contentType'], 'image/png')

            r = self.client.post(reverse('upload_logo') + '?filename=notes.txt',
                                 data=b'hello', content_type='text/plain')
            self.assertEqual(r.status_code, 400)

            r = self.client.post(reverse('upload_logo'), data=b'\x89PNG', content_type='image/png')
            self.assertEqual(r.data['errors'][0]['field'], 'filename')

    def test_upload_requires_login(self):
        r = self.client.post(reverse('upload_logo') + '?filename=a.png', data=b'x', content_type='image/png')
        self.assertEqual(r.status_code, 401)

    def test_healthz(self):
        r = self.client.get(reverse('healthz'))
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json(), {'success': True, 'db': True})
