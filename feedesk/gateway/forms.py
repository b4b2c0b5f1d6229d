"""
gateway/forms.py
────────────────
Schema for the order-creation endpoint.  Field names follow the JSON the
pay page posts (camelCase).
"""

from django import forms


class OrderForm(forms.Form):
    amount    = forms.DecimalField(max_digits=10, decimal_places=2)
    eventId   = forms.CharField(max_length=40)
    studentId = forms.CharField(max_length=40)

    def clean_amount(self):
        amount = self.cleaned_data['amount']
        if amount <= 0:
            raise forms.ValidationError('Amount must be greater than zero.')
        return amount
