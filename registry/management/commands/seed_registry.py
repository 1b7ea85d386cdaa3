"""
Management command to seed demo hospitals, HMOs and plans.

Safe to run repeatedly: records are looked up by their natural keys
(username, hospital name + admin, HMO code, plan name + HMO) before
being created.
"""
from django.core.management.base import BaseCommand
from django.db import transaction

from registry.currency import to_cents
from registry.models import Hmo, Hospital, InsurancePlan, User

DEMO_PASSWORD = 'Registry#2024'

USERS = [
    ('ada@example.com', 'Ada Obi'),
    ('tunde@example.com', 'Tunde Bello'),
]

HOSPITALS = [
    # name, state, LGA, admin email
    ('Lagos Island General', 'Lagos', 'Lagos Island', 'ada@example.com'),
    ('Ikeja Medical Centre', 'Lagos', 'Ikeja', 'ada@example.com'),
    ('Garki District Hospital', 'FCT', 'Abuja Municipal', 'tunde@example.com'),
]

HMOS = [
    # name, code, default hospital, creator email
    ('Avon Health', 'AVON', 'Lagos Island General', 'ada@example.com'),
    ('Hygeia HMO', 'HYG', 'Garki District Hospital', 'tunde@example.com'),
]

PLANS = [
    # name, type, monthly, yearly, deductible, out-of-pocket, max benefit (naira)
    ('Bronze Individual', InsurancePlan.TYPE_INDIVIDUAL, '5000', '54000', '0', '200000', '2000000'),
    ('Silver Family', InsurancePlan.TYPE_FAMILY, '15000', '162000', '10000', '500000', '5000000'),
    ('Gold Enterprise', InsurancePlan.TYPE_ENTERPRISE, '40000', '432000', '0', '1000000', '20000000'),
]


class Command(BaseCommand):
    help = 'Seed demo users, hospitals, HMOs and insurance plans'

    def add_arguments(self, parser):
        parser.add_argument('--password', default=DEMO_PASSWORD, help='Password for newly created demo users')

    @transaction.atomic
    def handle(self, *args, **options):
        users = {email: self.get_user(email, name, options['password']) for email, name in USERS}

        hospitals = {}
        for name, state, lga, admin in HOSPITALS:
            hospitals[name], _ = Hospital.objects.get_or_create(
                name=name, admin=users[admin],
                defaults={'state': state, 'local_government': lga},
            )

        created = 0
        for name, code, hospital, creator in HMOS:
            hmo, _ = Hmo.objects.get_or_create(
                code=code,
                defaults={'name': name, 'hospital': hospitals[hospital], 'created_by': users[creator]},
            )
            for plan_name, plan_type, monthly, yearly, deductible, oop, max_benefit in PLANS:
                _, was_created = InsurancePlan.objects.get_or_create(
                    hmo=hmo, name=plan_name,
                    defaults={
                        'hospital': hmo.hospital,
                        'plan_type': plan_type,
                        'monthly_cost_cents': to_cents(monthly),
                        'yearly_cost_cents': to_cents(yearly),
                        'deductible_cents': to_cents(deductible),
                        'annual_out_of_pocket_limit_cents': to_cents(oop),
                        'annual_max_benefit_cents': to_cents(max_benefit),
                    },
                )
                created += int(was_created)

        self.stdout.write(self.style.SUCCESS(
            f"Seeded {len(users)} users, {len(hospitals)} hospitals, {len(HMOS)} HMOs ({created} new plans)"
        ))

    def get_user(self, email, name, password):
        user, created = User.objects.get_or_create(username=email, defaults={'email': email, 'name': name})
        if created:
            user.set_password(password)
            user.save(update_fields=['password'])
        return user
