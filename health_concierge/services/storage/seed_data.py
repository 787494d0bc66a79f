"""Fixture data loaded into the in-memory store at startup.

An eight-month scripted history between the member Rohan Patel and the
concierge team, plus his profile and records.
"""

from typing import List, Optional, Tuple

from ...models.chat import Conversation
from ...models.health import HealthPlan, MedicalHistory, RiskPrediction, UserProfile

DEFAULT_USER_ID = "default-user"
MEMBER_NAME = "Rohan Patel"

_TEAM = {
    "ruby": ("Ruby", "Concierge"),
    "warren": ("Dr. Warren", "Medical Strategist"),
    "advik": ("Advik", "Performance Scientist"),
    "carla": ("Carla", "Nutritionist"),
    "rachel": ("Rachel", "Physiotherapist"),
    "neel": ("Neel", "Relationship Manager"),
    "team": ("Elyx Team", "Care Team"),
}

# (sender id or None for the member, date, time, message, month label)
_SCRIPT: List[Tuple[Optional[str], str, str, str, Optional[str]]] = [
    ("ruby", "01/05/24", "10:30 AM", "Hi Rohan! Welcome to Elyx! 🎉 I'm Ruby, your personal concierge. I'll be coordinating your health journey with our amazing team. Ready to get started?", "January 2024 - Onboarding"),
    (None, "01/05/24", "10:45 AM", "Hi Ruby! Yes, excited to begin. Travel a lot for work though - hope that won't be an issue?", None),
    ("ruby", "01/05/24", "10:47 AM", "Not at all! We specialize in working with frequent travelers. I'll introduce you to Dr. Warren for your initial assessment, then we'll create a flexible plan. First, let's schedule your diagnostic panel - any preference for timing?", None),
    (None, "01/05/24", "11:02 AM", "Mornings work best before I fly out. How about Thursday at 8 AM?", None),
    ("warren", "01/08/24", "9:15 AM", "Hello Rohan. I've reviewed your intake form. Your cholesterol levels from last year are concerning (LDL: 165 mg/dL). We need comprehensive labs and a stress test. Thursday 8 AM works perfectly.", None),
    (None, "01/08/24", "9:30 AM", "That sounds serious. I fly to Bangkok on Friday - is Thursday cutting it close?", None),
    ("warren", "01/08/24", "9:42 AM", "Not immediately dangerous, but needs addressing. Thursday morning tests are non-invasive - you'll be cleared for travel. Results ready by Friday evening, we'll discuss remotely while you're in Bangkok.", None),
    ("advik", "01/15/24", "7:20 AM", "Your first week of data is in! Sleep efficiency: 68% (target: 85%), HRV: 28ms (below average for your age). The Bangkok jet lag really hit you hard. Let's work on sleep hygiene protocols.", None),
    (None, "01/15/24", "7:45 AM", "Is 68% really that bad? I feel okay most mornings...", None),
    ("carla", "01/16/24", "12:10 PM", "Hi Rohan! I saw your glucose spikes from the Bangkok trip - that street food hit differently! Let me create a travel nutrition guide. Business trips don't have to derail progress.", None),
    ("warren", "01/18/24", "4:00 PM", "Lab results are in. LDL: 168 mg/dL (higher than last year), HDL: 45 mg/dL, Triglycerides: 185 mg/dL. Stress test shows good cardiac function but we need aggressive lifestyle intervention.", None),
    ("neel", "01/18/24", "4:30 PM", "Rohan, I know this feels overwhelming. But you have the best team in Singapore backing you. Ready to commit to the next 90 days?", None),
    ("rachel", "02/01/24", "8:00 AM", "Morning Rohan! Your personalized exercise plan is ready. Airport workouts, hotel room circuits, and city walking tours that double as cardio. No equipment needed.", "February 2024 - Building Habits"),
    (None, "02/01/24", "8:20 AM", "Airport workouts? That sounds... very public 😅", None),
    ("carla", "02/03/24", "1:15 PM", "Your \"Business Dining Survival Kit\" is ready! Key strategies: order first (others follow), choose grilled over fried, ask for dressing on side.", None),
    (None, "02/05/24", "9:00 PM", "Tried the salmon approach at Marina Bay yesterday. Client said \"great choice\" and ordered the same! This actually works!", None),
    ("advik", "02/12/24", "7:30 AM", "Week 3 data showing improvements! Sleep efficiency up to 73%, HRV averaging 32ms. The consistency is paying off! 📈", None),
    ("ruby", "03/15/24", "10:00 AM", "Rohan! It's been 3 months - time for your quarterly assessment! Dr. Warren has your new lab results. 🎯", "March 2024 - First Quarterly Review"),
    ("warren", "03/15/24", "10:30 AM", "Quarterly labs are exceptional! LDL dropped from 168 to 145 mg/dL, HDL up to 52 mg/dL, Triglycerides down to 125 mg/dL. How are you feeling?", None),
    (None, "03/15/24", "10:45 AM", "Actually feeling amazing! More energy during long meetings. Even my suits feel looser!", None),
    (None, "04/08/24", "11:30 PM", "Team, I need help. Back-to-back trips to Mumbai and KL. Oura ring died in Mumbai, missed 2 weeks of data. Completely fell off the nutrition plan.", "April 2024 - Travel Setback"),
    ("ruby", "04/09/24", "8:00 AM", "Rohan, breathe! One rough couple of weeks doesn't erase 3 months of progress. I'm sending a replacement Oura ring today - expedited to your office. Let's regroup.", None),
    ("rachel", "04/10/24", "7:45 AM", "Travel setbacks are normal! Let's ease back in - 10-minute hotel room workouts this week, then back to full routine. Progress, not perfection! 💪", None),
    (None, "05/12/24", "6:30 PM", "Dr. Warren, saw this article about statins having memory side effects. My company doctor suggested them for my cholesterol. Different advice from what we're doing?", "May 2024 - Evidence Questions"),
    ("warren", "05/12/24", "7:10 PM", "Valid concern. At your current LDL of 145 and dropping, lifestyle intervention is still first-line therapy. If we plateau above 130 after 6 months, we'll discuss statins.", None),
    (None, "05/18/24", "8:15 AM", "Quick question - read about intermittent fasting helping cholesterol. Worth trying or stick to current meal timing?", None),
    ("carla", "05/18/24", "9:00 AM", "Great question! With your travel schedule, I'd recommend time-restricted eating rather than full IF. A 12-hour eating window works better for business dinners.", None),
    (None, "06/20/24", "6:45 AM", "Team! Incredible milestone - just completed a 5K run in Seoul without stopping. First time in probably 10 years!", "June 2024 - Milestones"),
    ("advik", "06/20/24", "7:30 AM", "Your Seoul run data is beautiful! Perfect negative split, heart rate stayed in Zone 2, quick recovery. 📊", None),
    ("warren", "07/18/24", "3:00 PM", "6-month lab results are truly outstanding. LDL: 128 mg/dL (down 40 points from start!), HDL: 58 mg/dL, Triglycerides: 95 mg/dL, BP: 118/76.", "July 2024 - Six-Month Results"),
    ("neel", "07/18/24", "3:30 PM", "We'd love to invite your wife to a partner session next month. Understanding your support system helps us optimize your long-term success.", None),
    ("ruby", "08/10/24", "10:00 AM", "Rohan, it's been an incredible 8 months! Ready to design your maintenance phase?", "August 2024 - Long-term Planning"),
    (None, "08/15/24", "8:30 PM", "Quick question about maintenance - I'm traveling to Japan next month for 2 weeks. Any specific protocols for such a long trip?", None),
    ("carla", "08/15/24", "9:00 PM", "Japan is amazing for healthy eating! Focus on traditional choices: miso soup, grilled fish, steamed rice in moderation. I'll send a Japan-specific guide.", None),
    ("team", "08/31/24", "6:00 PM", "🎊 8-Month Journey Complete! LDL cholesterol: 165→125 mg/dL. Sleep efficiency: 68%→82%. Exercise consistency: 0→4 days/week.", None),
    (None, "08/31/24", "6:30 PM", "Thank you, team. This has been incredible. Here's to the next chapter! 🚀", None),
]


def scripted_conversations() -> List[Conversation]:
    conversations = []
    for sender_id, date, timestamp, message, month_label in _SCRIPT:
        if sender_id is None:
            conversations.append(Conversation(
                sender_name=MEMBER_NAME,
                sender_color="whatsapp",
                message=message,
                timestamp=timestamp,
                date=date,
                month_label=month_label,
                is_from_member=True,
            ))
        else:
            name, role = _TEAM[sender_id]
            conversations.append(Conversation(
                sender_id=sender_id,
                sender_name=name,
                sender_role=role,
                sender_color=sender_id,
                message=message,
                timestamp=timestamp,
                date=date,
                month_label=month_label,
                is_from_member=False,
            ))
    return conversations


def default_profile(now_iso: str) -> UserProfile:
    return UserProfile(
        id=DEFAULT_USER_ID,
        name=MEMBER_NAME,
        age=46,
        gender="Male",
        chronic_conditions=["Elevated Cholesterol", "Hypertension (Controlled)"],
        travel_frequency="Weekly business travel within APAC",
        lifestyle_habits={
            "exercise": "3-4 times per week",
            "diet": "Mediterranean-Asian fusion",
            "smoking": "Never",
            "alcohol": "Social drinking (2-3 drinks per week)",
            "stress": "High due to work demands",
            "sleep": "6-7 hours per night",
        },
        emergency_contact="Dr. Sarah Chen - Singapore General Hospital - +65 6222 3322",
        created_at="2024-05-15T08:00:00+00:00",
        updated_at=now_iso,
    )


def default_medical_history() -> List[MedicalHistory]:
    return [
        MedicalHistory(
            user_id=DEFAULT_USER_ID, category="lab_result", title="Total Cholesterol",
            value="5.8", unit="mmol/L", normal_range="<5.2", status="high",
            notes="Improved from 6.4 mmol/L six months ago through lifestyle interventions",
            source="chat_extraction", recorded_date="2024-12-01T00:00:00+00:00",
            created_at="2024-12-01T08:30:00+00:00",
        ),
        MedicalHistory(
            user_id=DEFAULT_USER_ID, category="lab_result", title="LDL Cholesterol",
            value="3.2", unit="mmol/L", normal_range="<2.6", status="high",
            notes="Target is <2.6 mmol/L as per Singapore MOH guidelines for cardiovascular risk management",
            source="chat_extraction", recorded_date="2024-12-01T00:00:00+00:00",
            created_at="2024-12-01T08:30:00+00:00",
        ),
        MedicalHistory(
            user_id=DEFAULT_USER_ID, category="lab_result", title="Blood Pressure",
            value="125/82", unit="mmHg", normal_range="<120/80", status="normal",
            notes="Well controlled with lifestyle modifications. Monitor closely during travel stress",
            source="chat_extraction", recorded_date="2024-12-10T00:00:00+00:00",
            created_at="2024-12-10T09:15:00+00:00",
        ),
        MedicalHistory(
            user_id=DEFAULT_USER_ID, category="medication", title="Atorvastatin",
            value="20mg", unit="daily", normal_range="N/A", status="normal",
            notes="Prescribed for cholesterol management. Taking with evening meal as recommended by MOH guidelines",
            source="manual_entry", recorded_date="2024-12-01T00:00:00+00:00",
            created_at="2024-12-01T08:30:00+00:00",
        ),
        MedicalHistory(
            user_id=DEFAULT_USER_ID, category="allergy", title="Shellfish Allergy",
            value="Moderate", unit="severity", normal_range="N/A", status="normal",
            notes="Causes hives and digestive upset. Carries EpiPen for severe reactions. Important for Singapore dining precautions",
            source="manual_entry", recorded_date="2024-05-15T00:00:00+00:00",
            created_at="2024-05-15T08:00:00+00:00",
        ),
    ]


def default_health_plans(now_iso: str) -> List[HealthPlan]:
    return [
        HealthPlan(
            user_id=DEFAULT_USER_ID,
            title="Cholesterol Management Program",
            description="Comprehensive lifestyle intervention to reduce LDL cholesterol to target levels through Singapore-appropriate dietary changes and exercise",
            action_steps=[
                "Reduce saturated fat to <7% of total calories",
                "Increase soluble fiber to 25g daily (oats, barley, local fruits)",
                "Exercise 150 minutes moderate intensity per week",
                "Weight management target: reduce 5-7% current weight",
                "Monthly lipid monitoring",
                "Quarterly specialist review",
            ],
            responsible_specialist="Carla (Nutritionist) + Dr. Warren (Medical Strategist)",
            timeline="6-month intensive phase, then maintenance",
            progress_tracker={
                "cholesterolTarget": "5.2 mmol/L",
                "currentLevel": "5.8 mmol/L",
                "weightTarget": "75kg",
                "currentWeight": "79kg",
                "exerciseGoal": "150 min/week",
                "exerciseCompliance": "85%",
            },
            risk_alerts=[
                "Travel stress may affect compliance",
                "Monitor blood pressure during weight loss",
                "Adjust medication if diet changes are insufficient",
            ],
            citations=[
                "MOH Clinical Practice Guidelines: Lipid Management",
                "Singapore Heart Foundation Dietary Guidelines",
                "WHO Cardiovascular Disease Prevention Guidelines",
            ],
            status="active",
            created_at="2024-05-15T08:00:00+00:00",
            updated_at=now_iso,
            review_date="2025-01-15T00:00:00+00:00",
        ),
        HealthPlan(
            user_id=DEFAULT_USER_ID,
            title="Travel Health Management",
            description="Customized health maintenance strategy for frequent APAC business traveler",
            action_steps=[
                "Maintain exercise routine with hotel gyms/bodyweight exercises",
                "Pack healthy snacks for long flights",
                "Stay hydrated - 250ml water per hour of flight",
                "Manage jet lag with melatonin and light therapy",
                "Schedule health checks around travel calendar",
                "Carry travel health kit with medications",
            ],
            responsible_specialist="Neel (Relationship Manager)",
            timeline="Ongoing with quarterly reviews",
            progress_tracker={
                "travelDays": "12 days/month average",
                "healthCompliance": "78%",
                "fitnessMaintenanceDuringTravel": "60%",
                "jetlagRecoveryTime": "2-3 days",
            },
            risk_alerts=[
                "Increased stress during peak travel seasons",
                "Diet compliance challenges in different countries",
                "Medication timing across time zones",
            ],
            citations=[
                "MOH Travel Health Advisory Guidelines",
                "WHO International Travel and Health",
                "Singapore Aviation Medicine Guidelines",
            ],
            status="active",
            created_at="2024-06-01T08:00:00+00:00",
            updated_at=now_iso,
            review_date="2025-03-01T00:00:00+00:00",
        ),
    ]


def default_risk_predictions(now_iso: str) -> List[RiskPrediction]:
    return [
        RiskPrediction(
            user_id=DEFAULT_USER_ID,
            risk_type="cardiovascular_disease",
            risk_percentage=15,
            contributing_factors=[
                "Elevated LDL cholesterol (3.2 mmol/L)",
                "Male gender",
                "Age 46",
                "High-stress occupation",
                "Family history of heart disease",
                "Frequent travel stress",
            ],
            prevention_steps=[
                "Continue cholesterol management program",
                "Maintain regular exercise routine",
                "Stress management techniques",
                "Annual cardiac screening",
                "Regular blood pressure monitoring",
            ],
            confidence=85,
            based_on_data="Lab results, lifestyle factors, family history, and Singapore Heart Foundation risk calculator",
            created_at=now_iso,
            valid_until="2025-12-15T00:00:00+00:00",
        ),
        RiskPrediction(
            user_id=DEFAULT_USER_ID,
            risk_type="diabetes_type2",
            risk_percentage=8,
            contributing_factors=[
                "Age 46",
                "Stress eating patterns",
                "Irregular meal timing due to travel",
                "Asian ethnicity (higher diabetes risk in Singapore)",
            ],
            prevention_steps=[
                "HbA1c monitoring every 6 months",
                "Weight management",
                "Regular meal timing",
                "Reduce refined carbohydrates",
            ],
            confidence=75,
            based_on_data="Ethnicity, lifestyle patterns, and Singapore diabetes risk factors",
            created_at=now_iso,
            valid_until="2025-12-15T00:00:00+00:00",
        ),
    ]
