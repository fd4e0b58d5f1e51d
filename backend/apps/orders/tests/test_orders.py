from decimal import Decimal

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.carts.models import CartLine
from apps.orders.models import MedicineOrder, Prescription
from apps.store.models import Product
from apps.users.models import User


class TestOrderApi(APITestCase):
    def setUp(self):
        self.user = User.objects.create_user(
            username='orderuser', password='TestPass123', email='order@example.com'
        )
        self.other = User.objects.create_user(
            username='otheruser', password='TestPass123', email='other@example.com'
        )
        self.plasters = Product.objects.create(
            name='Plasters', category='first_aid', unit_price=Decimal('5.00')
        )
        self.aspirin = Product.objects.create(
            name='Aspirin 75mg', category='heart_health', unit_price=Decimal('1.99'),
            requires_prescription=True,
        )
        self.orders_url = reverse('api-orders')
        self.prescriptions_url = reverse('api-prescriptions')

    def _auth(self, username='orderuser'):
        login = self.client.post(
            reverse('auth-login'), {'username': username, 'password': 'TestPass123'}, format='json'
        )
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {login.data['access']}")

    def test_requires_authentication(self):
        res = self.client.post(self.orders_url, {'deliveryAddress': 'Flat 2'}, format='json')
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)
        res = self.client.get(self.prescriptions_url)
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_cart_checkout_records_order_and_empties_cart(self):
        self._auth()
        CartLine.objects.create(owner=self.user, product=self.plasters, quantity=2)
        res = self.client.post(self.orders_url, {'deliveryAddress': '12 High Street'}, format='json')
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res.data['status'], 'pending')
        self.assertEqual(res.data['medicine_details']['total'], '10.00')

        order = MedicineOrder.objects.get(user=self.user)
        self.assertEqual(order.delivery_address, '12 High Street')
        self.assertEqual(order.medicine_details['items'][0]['productId'], str(self.plasters.id))
        self.assertFalse(CartLine.objects.filter(owner=self.user).exists())

        res = self.client.get(self.orders_url)
        self.assertEqual([o['id'] for o in res.data], [str(order.id)])

    def test_prescription_only_product_blocks_checkout_without_prescription(self):
        self._auth()
        CartLine.objects.create(owner=self.user, product=self.aspirin, quantity=1)
        res = self.client.post(self.orders_url, {'deliveryAddress': 'Flat 2'}, format='json')
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.json()['error']['details'], {'productIds': [str(self.aspirin.id)]})
        self.assertFalse(MedicineOrder.objects.exists())
        self.assertTrue(CartLine.objects.filter(owner=self.user).exists())

    def test_checkout_with_recorded_prescription(self):
        self._auth()
        CartLine.objects.create(owner=self.user, product=self.aspirin, quantity=1)
        res = self.client.post(
            self.prescriptions_url,
            {'prescriptionRef': f'{self.user.id}/rx.pdf', 'notes': 'monthly'},
            format='json',
        )
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        prescription_id = res.data['id']
        self.assertEqual(Prescription.objects.get(id=prescription_id).status, 'pending')

        res = self.client.post(
            self.orders_url,
            {'deliveryAddress': 'Flat 2', 'prescriptionId': prescription_id},
            format='json',
        )
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res.data['prescription_id'], prescription_id)

    def test_foreign_prescription_is_not_found(self):
        foreign = Prescription.objects.create(user=self.other, prescription_ref='other/rx.pdf')
        self._auth()
        CartLine.objects.create(owner=self.user, product=self.aspirin, quantity=1)
        res = self.client.post(
            self.orders_url,
            {'deliveryAddress': 'Flat 2', 'prescriptionId': str(foreign.id)},
            format='json',
        )
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)

    def test_manual_order(self):
        self._auth()
        res = self.client.post(
            self.orders_url,
            {'deliveryAddress': 'Flat 2', 'medicines': 'Amoxicillin 500mg', 'quantity': 2},
            format='json',
        )
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        order = MedicineOrder.objects.get(user=self.user)
        self.assertEqual(order.medicine_details, {'medicines': 'Amoxicillin 500mg', 'quantity': 2})

    def test_empty_cart_checkout_is_400(self):
        self._auth()
        res = self.client.post(self.orders_url, {'deliveryAddress': 'Flat 2'}, format='json')
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.json()['error']['message'], 'Cart is empty')

    def test_prescriptions_are_listed_per_owner(self):
        Prescription.objects.create(user=self.other, prescription_ref='other/rx.pdf')
        self._auth()
        self.client.post(self.prescriptions_url, {'prescriptionRef': 'mine.pdf'}, format='json')
        res = self.client.get(self.prescriptions_url)
        self.assertEqual([p['prescription_ref'] for p in res.data], ['mine.pdf'])
